[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jdkswitch"
version = "1.0.0"
description = "Back up and rewrite the system-wide JAVA_HOME, PATH and CLASSPATH on Windows"
requires-python = ">=3.10"
dependencies = []
keywords = ["java", "jdk", "java_home", "environment", "windows", "registry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jdkswitch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
