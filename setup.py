from setuptools import setup, find_namespace_packages

setup(
    name='HoldemEngine',
    version='0.1.0',
    packages=find_namespace_packages(where='src', exclude=['tests*']),
    package_dir={'': 'src'},
    install_requires=[
        'numpy>=2.1.2',
        'matplotlib>=3.7.1',
        'tqdm>=4.65.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    author='Your Name',
    description='Multi-participant Texas hold \'em engine with equity-driven automated play',
    python_requires='>=3.10',
)
