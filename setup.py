"""
ocw-to-hugo - Convert OCW course exports into Hugo markdown

Installation:
    pip install -e .

This installs the 'ocw-to-hugo' command globally in your environment.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
long_description = ''
if os.path.exists('README.md'):
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()

setup(
    name='ocw-to-hugo',
    version='1.0.0',
    description='Convert OCW course exports into Hugo markdown',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Dale Chapman',
    author_email='',
    license='MIT',

    packages=find_packages(include=['ocw_to_hugo', 'ocw_to_hugo.*']),

    include_package_data=True,

    # Python version requirement
    python_requires='>=3.9',

    # Dependencies
    install_requires=[
        'click>=8.0',
        'python-frontmatter>=1.0',
        'PyYAML>=6.0',
        'beautifulsoup4>=4.11',
        'lxml>=4.9',
        'markdownify>=0.11',
    ],

    # Optional dependencies
    extras_require={
        'dev': [
            'pytest>=7.4',
            'pytest-cov>=4.1',
            'pytest-mock>=3.11',
        ],
    },

    # CLI entry point - this creates the 'ocw-to-hugo' command
    entry_points={
        'console_scripts': [
            'ocw-to-hugo=ocw_to_hugo.cli:cli',
        ],
    },

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Education',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Education',
    ],

    keywords='ocw hugo course markdown static-site',
)
