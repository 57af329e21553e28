from setuptools import setup, find_packages

setup(
    name="belay",
    version="0.1.0",
    description="Run your hosted CI checks locally before pushing",
    packages=find_packages(include=["belay", "belay.*"]),
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0",
        "rich>=13.0.0",
        "PyYAML>=6.0",
        "toml>=0.10",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pyfakefs>=5.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "belay=belay.__main__:main",
        ]
    },
  )
