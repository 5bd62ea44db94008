#!/usr/bin/env python3
"""
Setup script for Study Blog - static blog generator.
"""

from setuptools import setup, find_packages

# Project metadata and dependencies are defined in pyproject.toml

setup(
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'studyblog_pkg': [
            'templates/*.html',
            'assets/css/*.css',
            'assets/js/*.js',
        ],
    },
    include_package_data=True,
)
