"""
Setup script for benchtrend.

Installs the regression-detection engine from the src/ layout.
"""

import os

from setuptools import setup

setup(
    name='benchtrend',
    version='0.1.0',
    author='benchtrend Team',
    description='Benchmark history tracking with statistical regression detection',
    long_description=open('README.md').read() if os.path.exists('README.md') else '',
    long_description_content_type='text/markdown',
    packages=[
        'benchtrend',
        'benchtrend.core',
        'benchtrend.regression',
        'benchtrend.stats',
    ],
    package_dir={'': 'src'},
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.21.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0.0',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Software Development :: Testing',
        'Topic :: System :: Benchmark',
    ],
    zip_safe=False,
)
