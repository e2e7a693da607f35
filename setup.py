from setuptools import setup, find_packages

setup(
    name="velaroma",
    version="1.0.0",
    packages=find_packages(include=["velaroma", "velaroma.*"]),
    install_requires=[
        "django>=4.2",
        "djangorestframework",
        "drf-spectacular",
        "djangorestframework-simplejwt",
        "psycopg2-binary",
        "python-decouple",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-django",
        ],
    },
    python_requires=">=3.11",
)
