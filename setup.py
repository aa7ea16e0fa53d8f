import setuptools

setuptools.setup(
    name='taskgen',
    version='0.1.0',
    license='MIT',
    zip_safe=False,
    packages=setuptools.find_packages(include=['taskgen', 'taskgen.*']),
    package_data={'taskgen.schema_tests': ['fixtures/*.html']},
    fullname='Sharpliner Task Model Generator',
    install_requires=[
        'beautifulsoup4', 'requests',
        'pyyaml',         'rich',     'rapidfuzz'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['taskgen = taskgen.main:main'],
    },
    python_requires='>=3.8',
    description='Generates Sharpliner C# task models from Azure DevOps task reference pages.',
)
