from setuptools import setup, find_packages

setup(
    name="cellarbook",
    version="0.1.0",
    description="Cellarbook - reporting for a personal wine cellar: analytics, portfolio value and alerts.",
    author="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "pydantic>=2.0.0",
        "supabase>=2.0.0",
        "plotly>=5.15.0",
        "python-dotenv>=1.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
)
