[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tlschat"
version = "0.1.0"
description = "A small TLS-encrypted multi-user chat server and terminal client with password login and chat history"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "tls", "ssl", "server", "client", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tlschat-server = "tlschat.server:main"
tlschat-client = "tlschat.client:main"
tlschat-idle = "tlschat.idle:main"

[tool.hatch.build.targets.wheel]
packages = ["tlschat"]

[tool.pytest.ini_options]
addopts = "-ra"
