from codecs import open

from setuptools import find_packages, setup

REPO_URL = "https://github.com/storefrontpy/storefrontpy"
VERSION = "0.0.1"

with open("README.md") as fh:
    long_description = fh.read()
with open("requirements.txt") as fh:
    required = fh.read().splitlines()
with open("requirements-test.txt") as fh:
    test_required = [line for line in fh.read().splitlines() if line and not line.startswith("-r")]

setup(
    name="storefrontpy",
    version=VERSION,
    author="storefrontpy",
    description="Python library to log in to a Citrix StoreFront behind a NetScaler Gateway",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url=REPO_URL,
    package_dir={".": ""},
    packages=find_packages(exclude=["tests"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=required,
    extras_require={"test": test_required},
    entry_points="""
    [console_scripts]
    storefront=storefrontpy.cmdline:main
    """,
)
