"""
Setup configuration for error-filter component.
"""

from setuptools import setup, find_packages

setup(
    name='error-filter',
    version='1.0.0',
    description='Duplicate diagnostic filter with a persisted dedup window',
    author='Error Filter Team',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.11',
    install_requires=[],
    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'flake8>=6.0.0',
            'black>=23.0.0',
            'mypy>=1.4.0',
        ]
    },
    entry_points={
        'console_scripts': [
            'error-filter-stats=error_filter.cli:main',
        ]
    }
)
