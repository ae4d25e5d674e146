from importlib.metadata import PackageNotFoundError, version

try:
    version = version("DsvIO")
except PackageNotFoundError:
    version = "0.0.0"
