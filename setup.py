from setuptools import setup, find_packages

setup(
    name="cfn-pipeline-validator",
    version="0.1.0",
    packages=find_packages(exclude=["src.tests", "src.tests.*"]),
    install_requires=[
        "boto3",
        "botocore",
    ],
    extras_require={
        "test": [
            "pytest",
            "moto>=5",
        ],
    },
    author="ecaa",
    description="CodePipeline action that validates a CloudFormation template artifact",
    python_requires='>=3.8',
)
