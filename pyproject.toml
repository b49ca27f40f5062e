[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gorder"
version = "0.1.0"
description = "Order, stock and payment service components built around command and query handlers and RabbitMQ events"
requires-python = ">=3.10"
keywords = ["orders", "stock", "payments", "cqrs", "rabbitmq", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
    "Typing :: Typed",
]
dependencies = [
    "pyyaml>=6.0",
    "pika>=1.3",
    "flask>=2.3",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[tool.hatch.build.targets.wheel]
packages = ["gorder"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
