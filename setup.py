from setuptools import setup, find_packages
import os

def read_file(filename):
    """读取文件内容"""
    with open(os.path.join(os.path.dirname(__file__), filename), 'r', encoding='utf-8') as f:
        return f.read()

setup(
    name="configstore",
    version="1.0.0",
    author="Configstore Team",
    author_email="configstore@example.com",
    description="持久化键值配置存储，支持YAML与pickle两种格式和安全保存",
    long_description=read_file('README.md'),
    long_description_content_type="text/markdown",
    url="https://github.com/example/configstore",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "scripts"]),
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "configstore = configstore.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries",
    ],
    python_requires=">=3.8",
    install_requires=[line for line in read_file('requirements.txt').splitlines() if line.strip()],
    extras_require={
        "test": ["pytest"],
    },
    project_urls={
        "Source": "https://github.com/example/configstore",
        "Tracker": "https://github.com/example/configstore/issues",
    },
)
