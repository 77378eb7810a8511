from setuptools import setup, find_packages

with open("README.md", 'r') as f:
    long_description = f.read()
with open("requirements.txt", 'r') as f:
    required = [line for line in f.read().splitlines() if line.strip()]
VERSION = "0.1.0"


setup(
    name='psetparser',
    version=VERSION,
    description='Read IFC property and quantity set definitions from the '
                'html pages of the IFC documentation',
    license="LICENSE",
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(include=['psetparser*']),
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=required,
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'psetparser = psetparser.__main__:commandline_interface',
        ],
    }
)
