# cli.py - Command line interface for ocw-to-hugo
"""
ocw-to-hugo CLI - Convert parsed OCW course exports into Hugo content

COMMANDS:
    ocw-to-hugo convert -i INPUT -o OUTPUT [-c COURSES]   Convert courses
    ocw-to-hugo paths -i INPUT [--course ID]              Dump the path index
    ocw-to-hugo init                                      Write ocw-to-hugo.yaml
    ocw-to-hugo version                                   Show version information

EXAMPLES:
    # Convert every course folder under ./private/input
    ocw-to-hugo convert -i ./private/input -o ./private/output

    # Convert only the courses listed in courses.json
    ocw-to-hugo convert -i ./input -o ./output -c courses.json

    # Rewrite S3 links to site-relative paths
    ocw-to-hugo convert -i ./input -o ./output --strip-s3 --static-prefix /coursemedia

    # Inspect the resolved paths for one course
    ocw-to-hugo paths -i ./input --course 8-01sc-classical-mechanics-fall-2016
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from ocw_to_hugo import __version__
from ocw_to_hugo.config_utils import create_config_template, get_config
from ocw_to_hugo.constants import CONFIG_FILENAME, ERROR_LOG_FILENAME
from ocw_to_hugo.errors import OcwToHugoError
from ocw_to_hugo.file_operations import build_paths_for_all_courses, convert_courses
from ocw_to_hugo.icons import COURSE, FOLDER, PAGE, log, log_error, log_info, log_success, log_warning
from ocw_to_hugo.logging_utils import setup_logging
from ocw_to_hugo.path_index import count_by_type


def _load_run_config(**overrides):
    config = get_config(overrides=overrides)
    memory = setup_logging(config.verbosity, config.error_log)
    return config, memory


def _fail(error: OcwToHugoError) -> None:
    click.echo(str(error), err=True)
    sys.exit(1)


# ============================================================================
# Click Group Setup
# ============================================================================

@click.group()
def cli():
    """
    ocw-to-hugo - Convert OCW course exports to Hugo markdown

    Reads <input>/<course_id>/<course_id>_parsed.json files and writes
    content/courses/<course_id>/ under the output folder.
    """


# ============================================================================
# Conversion
# ============================================================================

@cli.command()
@click.option('--input', '-i', 'input_dir', type=click.Path(path_type=Path), help='Folder of course exports')
@click.option('--output', '-o', 'output_dir', type=click.Path(path_type=Path), help='Hugo site folder to write into')
@click.option('--courses', '-c', 'courses_file', type=click.Path(path_type=Path),
              help='JSON file listing the courses to convert')
@click.option('--strip-s3/--no-strip-s3', default=None, help='Rewrite S3 URLs to the static prefix')
@click.option('--static-prefix', default=None, help='Prefix used in place of the S3 origin')
@click.option('--verbose', '-v', count=True, help='More output (-vv for debug)')
@click.option('--quiet', '-q', is_flag=True, help='Only show warnings and errors')
@click.option('--error-log', is_flag=False, flag_value=ERROR_LOG_FILENAME, default=None,
              help=f'Also write errors to a file (default name {ERROR_LOG_FILENAME})')
@click.argument('course_ids', nargs=-1)
def convert(
    input_dir: Optional[Path],
    output_dir: Optional[Path],
    courses_file: Optional[Path],
    strip_s3: Optional[bool],
    static_prefix: Optional[str],
    verbose: int,
    quiet: bool,
    error_log: Optional[str],
    course_ids: Tuple[str, ...],
):
    """
    Convert courses to Hugo markdown

    Courses named as arguments or in --courses must exist; otherwise every
    course folder under the input directory is converted.

    Examples:
        ocw-to-hugo convert -i input -o site
        ocw-to-hugo convert -i input -o site 18-06-linear-algebra-spring-2010
    """
    verbosity = 0 if quiet else (1 + verbose if verbose else None)
    try:
        config, memory = _load_run_config(
            input_dir=input_dir,
            output_dir=output_dir,
            courses_file=courses_file,
            strip_s3=strip_s3,
            static_prefix=static_prefix,
            verbosity=verbosity,
            error_log=error_log,
        )
        result = convert_courses(config, list(course_ids) or None)
    except OcwToHugoError as e:
        _fail(e)
        return

    click.echo()
    click.echo(log_success("Conversion complete"))
    click.echo(log(COURSE, f"Converted {len(result.courses_converted)} of {result.courses_requested} course(s)"))
    click.echo(log(PAGE, f"{result.files_written} file(s) written"))
    click.echo(log(FOLDER, f"Output: {config.output_dir}"))
    warnings = memory.count(logging.WARNING)
    errors = memory.count(logging.ERROR)
    if warnings:
        click.echo(log_warning(f"{warnings} warning(s)"))
    if errors:
        click.echo(log_error(f"{errors} error(s)"))
        if config.error_log:
            click.echo(log_info(f"Details in {config.error_log}"))


# ============================================================================
# Inspection
# ============================================================================

@cli.command()
@click.option('--input', '-i', 'input_dir', type=click.Path(path_type=Path), help='Folder of course exports')
@click.option('--courses', '-c', 'courses_file', type=click.Path(path_type=Path),
              help='JSON file listing the courses to index')
@click.option('--course', 'only_course', help='Only print entries for this course')
@click.option('--verbose', '-v', count=True, help='More output (-vv for debug)')
def paths(input_dir: Optional[Path], courses_file: Optional[Path], only_course: Optional[str], verbose: int):
    """
    Print the resolved path index as JSON

    Useful for checking where a uid will end up before converting.
    """
    try:
        config, _ = _load_run_config(
            input_dir=input_dir,
            courses_file=courses_file,
            verbosity=verbose or 0,
        )
        _, lookup, _ = build_paths_for_all_courses(config)
    except OcwToHugoError as e:
        _fail(e)
        return

    course_ids = [only_course] if only_course else lookup.course_ids
    output = {
        "counts": count_by_type(lookup),
        "courses": {
            course_id: [
                {
                    "uid": entry.uid,
                    "type": entry.item_type.name.lower(),
                    "path": entry.path,
                    "parent_uid": entry.parent_uid,
                }
                for entry in lookup.course_entries(course_id)
            ]
            for course_id in course_ids
        },
    }
    click.echo(json.dumps(output, indent=2))


# ============================================================================
# Setup
# ============================================================================

@cli.command()
@click.option('--force', is_flag=True, help='Overwrite an existing config file')
def init(force: bool):
    """Write an ocw-to-hugo.yaml template in the current folder"""
    target = Path.cwd() / CONFIG_FILENAME
    if target.exists() and not force:
        click.echo(log_warning(f"{CONFIG_FILENAME} already exists (use --force to overwrite)"), err=True)
        sys.exit(1)
    target.write_text(create_config_template(), encoding="utf-8")
    click.echo(log_success(f"Wrote {target}"))


# ============================================================================
# Version
# ============================================================================

@cli.command()
def version():
    """Show ocw-to-hugo version"""
    click.echo(f"ocw-to-hugo v{__version__}")
    click.echo("Converts OCW course exports to Hugo markdown")


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == '__main__':
    cli()
