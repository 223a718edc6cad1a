import setuptools

setuptools.setup(
    name = 'cornu',
    version = '1.0',
    description = 'plane curves, clothoid fitting and polyline flattening',
    packages = setuptools.find_packages(exclude=['tests']),
    install_requires=['numpy', 'scipy'],
    extras_require={'test': ['pytest']},
)
