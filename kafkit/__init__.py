"""Wire codecs, compression, errors, assignments and partitioning for Kafka clients."""

__version__ = "0.1.0"
__all__ = [
    "assignment",
    "codecs",
    "compression",
    "errors",
    "gzip_codec",
    "partitioning",
    "snappy_codec",
    "xxhash",
]