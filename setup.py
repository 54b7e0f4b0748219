from setuptools import setup, find_packages

from os import path
this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='langtag_registry',
    version='1.0.0',
    description='Describes and normalizes BCP-47 language tags using the IANA Language Subtag Registry.',
    long_description_content_type='text/markdown',
    long_description=long_description,
    license='GNU GPL',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'langtag_registry': ['logging.toml']},
    python_requires='>=3.10',
    install_requires=open('requirements.txt').readlines(),
    extras_require={'test': ['pytest'], 'docs': ['sphinx', 'furo']},
    entry_points={
        'console_scripts': ['langtag-registry=langtag_registry.__main__:main'],
    },
)
