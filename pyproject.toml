[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jotbook"
version = "0.1.0"
description = "Note models for plain-text and Tomboy/Bijiben XML notes, with a formatting-aware text buffer"
requires-python = ">=3.10"
keywords = ["notes", "tomboy", "bijiben", "xml", "note-taking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: News/Diary",
    "Topic :: Text Processing :: Markup :: XML",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jotbook"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
