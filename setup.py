"""Setup pour Repartition Contentieux."""

from setuptools import setup, find_packages

setup(
    name="repartition_contentieux",
    version="1.0.0",
    description="Repartition Etat / Collectivite des encaissements d'affaires contentieuses",
    author="AJ",
    python_requires=">=3.10",
    packages=find_packages(include=["repartition_contentieux", "repartition_contentieux.*"]),
    entry_points={
        "console_scripts": [
            "repartition-contentieux=repartition_contentieux.main:main",
        ],
    },
    install_requires=[
        "openpyxl>=3.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
)
