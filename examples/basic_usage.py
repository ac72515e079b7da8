"""Basic cached loading example.

This example shows the simplest usage pattern: create a loader with the
default adapters and load packages through the general cache. Repeated
requests for the same package name reuse the first load.
"""

from pathlib import Path

from packloader import PackageLoader


# Option 1: Factory method (recommended for most cases)
# Wires up RouterReader (local paths, file:// and s3://), MemoryStream
# and SummaryDeserializer
loader = PackageLoader.from_defaults()

# Option 2: Manual wiring (full control over adapters)
# Use this when you need a custom deserializer or reader
# from packloader import FilesystemReader, SummaryDeserializer
# loader = PackageLoader(
#     deserializer=SummaryDeserializer(),
#     reader=FilesystemReader(),
# )

# The first request reads the file and parses its header
core = loader.load_cached_package("./System/Core.u")
print(f"Loaded {core.name} ({core.stage.value})")

# The cache key is the base filename: another directory, same package
again = loader.load_cached_package("./Backup/Core.u")
assert again is core

# Lookups never load
engine = loader.get_from_cache("Engine")
print(f"Engine cached: {engine is not None}")

# Dependencies go through the import cache and are fully initialized
buffer = Path("./System/Engine.u").read_bytes()
engine = loader.load_import_package("./System/Engine.u", buffer)
print(f"Engine has {len(engine.names)} names")

for package in loader.get_imported_packages():
    print(f"  imported: {package.name}")
