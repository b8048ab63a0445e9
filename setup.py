from setuptools import setup, find_packages

setup(
    name="oauth1-resource-owner",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "cryptography>=3.4.7",
        "oauthlib>=3.2.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=0.19.0",
        "requests>=2.26.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    description="OAuth 1.0a resource owner: three-legged handshake and user profile mapping",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
