import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name='sklearn_drsa',
    version='0.0',
    packages=setuptools.find_packages(),
    license='BSD',
    description='Dominance cones and their decision distributions for the '
                '*Dominance-based Rough Set Approach*, for scikit-learn.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires='>=3.6',
    install_requires=[
        'scikit_learn >= 0.22',
        'numpy',
        'joblib',
    ],
    extras_require={
        'tests': ['matplotlib', 'pytest >= 3.5'],
        'plot': ['matplotlib'],
    },
)
