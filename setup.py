from setuptools import find_namespace_packages, setup


def read_requirements():
    with open("requirements.txt") as f:
        return f.read().splitlines()


setup(
    name="focus-menu",
    version="0.1.0",
    description="Application naming, desktop-shell detection and file-manager ordering for a panel window switcher",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.11",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pygobject-stubs",
        ],
        "test": [
            "pytest",
        ],
    },
    packages=find_namespace_packages(include=["focusmenu*"]),
    include_package_data=True,
)
