from setuptools import find_packages, setup

main_ns = {}
with open("src/grid_fidelity/_version.py") as ver_file:
    exec(ver_file.read(), main_ns)

setup(
    name="grid-fidelity",
    version=main_ns["__version__"],
    author="Jon Connell",
    author_email="python@figsandfudge.com",
    description="Sparse spreadsheet grid model with cross-format fidelity checks",
    license="MIT",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"grid_fidelity": ["data/*.json"]},
    entry_points={
        "console_scripts": [
            "check-fidelity=grid_fidelity._check_fidelity:main",
        ],
    },
    install_requires=["enum-tools", "pendulum", "python-dateutil", "sigfig"],
    extras_require={
        "test": ["pytest", "pytest-check", "pytest-console-scripts"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
