# setup.py
from setuptools import setup, find_packages

setup(
    name="minilisp",
    version="0.3.0",
    description="A minimal Lisp interpreter with a stack-based calling convention",
    packages=find_packages(include=["minilisp", "minilisp.*", "minilisp_lsp", "minilisp_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "hypothesis>=6",
        ],
    },
    entry_points={
        "console_scripts": [
            "minilisp=minilisp.__main__:main",
            "minilisp-ls=minilisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
