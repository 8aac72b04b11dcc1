"""
Possible resoruces:
  - https://packaging.python.org/guides/distributing-packages-using-setuptools/
"""
import glob

from setuptools import setup, find_packages

import odsync


with open('README.rst') as file:
    longDescription = file.read()


setup(
    author='Alexander Theler',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Manufacturing',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: System :: Hardware',
        'Topic :: System :: Networking',
        'Topic :: Text Processing :: Markup :: XML',
    ],
    description='Object dictionary model and XML synchronization for POWERLINK device descriptions.',
    install_requires=[
        'setuptools',
        'lxml',
        'canopen',
        'ruamel.yaml',
        'tomlkit',
        'configobj',
    ],
    extras_require = {
        'test':  ['pytest'],
    },
    keywords='POWERLINK CANopen object dictionary XDD XDC',
    long_description=longDescription,
    name='odsync',
    packages=find_packages(exclude=['tests']),
    data_files=[
        ('scripts', glob.glob('scripts/*.py')),
    ],
    include_package_data=True,
    test_suite='tests',
    version=odsync.__version__,
    platforms=['Darwin', 'Linux'],
    license='MIT',
)
