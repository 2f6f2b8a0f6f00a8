[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tubefetch"
version = "1.0.0"
description = "Fetches recent YouTube videos for a search query, stores them in SQLite and serves them through a paginated JSON API"
requires-python = ">=3.10"
keywords = ["youtube", "videos", "api", "flask", "sqlite", "pagination", "fetcher"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "requests",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tubefetch-server = "tubefetch.server:main"
tubefetch-migrate = "tubefetch.migrate:main"

[tool.hatch.build.targets.wheel]
packages = ["tubefetch"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
