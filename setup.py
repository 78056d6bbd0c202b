from setuptools import find_packages, setup

setup(
    name="scopelink",
    version="0.1.0",
    description="Link and unlink scoped npm packages across local workspaces",
    packages=find_packages(include=["scopelink", "scopelink.*"]),
    python_requires=">=3.10",
    install_requires=[
        "typer<0.26",  # CLI framework (0.26+ vendors its own click)
        "click>=8.2",  # Context and usage errors beneath typer
        "pydantic>=2",  # Configuration and output schemas
        "rich",  # Terminal formatting
        "PyYAML",  # YAML output
        "pygments",  # Output highlighting on a tty
    ],
    extras_require={
        "test": [
            "pytest>=7.0",  # Testing framework
            "pytest-timeout>=2.1",  # Test timeouts
            "pytest-xdist>=3.0",  # Parallel test execution
        ],
        "dev": [
            "pre-commit",  # Git hook management
            "ruff",  # Linting and formatting
            "mypy",  # Static type checking
            "types-PyYAML",  # Type stubs
            "types-setuptools",  # Type stubs
        ],
    },
    entry_points={
        "console_scripts": [
            "scopelink=scopelink.cli:main",
        ],
    },
)
