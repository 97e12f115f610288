#!/usr/bin/env python3
"""
padmotion Setup Script
"""

from setuptools import setup, find_packages

setup(
    name='padmotion',
    version='1.0.0',
    description='Six-axis IMU complementary-filter fusion for game controllers',
    author='FurSys AI Team',
    packages=find_packages(include=['padmotion', 'padmotion.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'pandas>=1.3.0',
        'pyyaml>=5.4.0',
    ],
    extras_require={
        'dev': [
            'pytest>=6.0.0',
            'pytest-cov>=2.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'padmotion=padmotion.main:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
