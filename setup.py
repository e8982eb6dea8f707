import os
import re

from setuptools import setup


def ulidkit_version() -> str:
    with open(os.path.join('ulidkit/__init__.py')) as f:
        return re.search("__version__ = ['\"]([^'\"]+)['\"]", f.read()).group(1)


VERSION = ulidkit_version()
DESCRIPTION = open('README.md').read()

setup(
    name='ulidkit',
    version=VERSION,
    python_requires='>=3.8',
    description='Universally Unique Lexicographically Sortable Identifiers',
    long_description=DESCRIPTION,
    long_description_content_type='text/markdown',
    packages=['ulidkit'],
    include_package_data=True,
    license='MIT',
    classifiers=[
        'Operating System :: OS Independent',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    install_requires=[
        'orjson>=3.9.2',
        'structlog>=23.1',
    ],
    extras_require={
        'test': [
            'pytest',
            'faker',
        ],
    },
    entry_points={
        'console_scripts': ['ulidkit=ulidkit.cli:main'],
    },
)
