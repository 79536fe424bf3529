#!/usr/bin/env python3

from setuptools import setup, find_namespace_packages


setup(name='real48',
      version='0.1.0',
      description='Codec for the 48-bit packed Real48 floating point format',
      packages=find_namespace_packages(include=['real48', 'real48.*']),
      install_requires=[
          'pyyaml',
          'numpy',
      ],
      extras_require={
          'test': [
              'pytest',
          ],
      },
      python_requires='>=3.8',
      )
