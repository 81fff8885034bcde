import glob
import os

from setuptools import find_packages, setup

top_level_modules = [
    os.path.splitext(os.path.basename(p))[0]
    for p in glob.glob('src/*.py')
    if os.path.basename(p) != 'conftest.py'
]

setup(
    name='grid_core',
    version='0.0.0-dev',
    packages=find_packages(where='src', exclude=['tests', 'tests.*']),
    package_dir={'': 'src'},
    py_modules=top_level_modules,
    include_package_data=True,
    description='Row mutation and query synchronization core for the data grid panel',
    python_requires='>=3.10',
    install_requires=[
        'loguru',
        'numpy',
        'pandas',
        'prometheus_client',
        'pydantic>=2',
        'requests',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
