from setuptools import setup, find_packages

setup(
    name="pomwright",
    version="1.0.0",
    packages=find_packages(include=["pomwright", "pomwright.*"]),
    install_requires=[
        "playwright>=1.40.0",
        "pytest>=7.0.0",
        "pytest-rerunfailures>=12.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
        "openpyxl>=3.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.9",
    description="Page-object test automation scaffold for Playwright and pytest",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Framework :: Pytest",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
