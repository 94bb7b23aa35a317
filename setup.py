#!/usr/bin/env python3

from setuptools import find_namespace_packages, setup

if __name__ == '__main__':
    setup(
        name='blockingqueue',
        version='0.1.0',
        description='Thread-safe blocking FIFO queue for Python',
        author='Ilya Egorov',
        author_email='0x42005e1f@gmail.com',
        license='ISC',
        python_requires='>=3.8',
        package_dir={'': 'src'},
        packages=find_namespace_packages(where='src'),
        package_data={'blockingqueue': ['*.pyi']},
        install_requires=[
            'typing-extensions>=4.6.0; python_version<"3.11"',
            'wrapt>=1.14.0',
        ],
        extras_require={
            'test': [
                'pytest>=7.0',
            ],
        },
    )
