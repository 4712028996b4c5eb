# kafkit

Pure-Python building blocks for talking to a Kafka cluster, with no
dependencies outside the standard library:

- `kafkit.errors` – the `KafkaCode` enumeration of broker error codes and an
  exception hierarchy rooted at `KafkaError` (`KafkaServerError`,
  `TopicPartitionError`, `UnexpectedEOFError`, `CodecError`,
  `StringDecodeError`, `InvalidSnappyError`, ...).
- `kafkit.codecs` – big-endian encoders and decoders for the protocol's
  primitive types: integers, length-prefixed strings and byte strings, and
  arrays.
- `kafkit.compression` – the `Compression` enumeration (`NONE`, `GZIP`,
  `SNAPPY`) whose values are the codec bits of a message's attributes.
- `kafkit.gzip_codec` and `kafkit.snappy_codec` – payload compression,
  including `SnappyReader` for the chunked snappy stream format.
- `kafkit.xxhash` – `xxh32` and the incremental `XxHash32`, the hash used to
  partition by key.
- `kafkit.assignment` – topic/partition assignments of a consumer.
- `kafkit.partitioning` – `Record`, `ProduceMessage`, `Topics`, `Partitions`,
  the abstract `Partitioner` and `DefaultPartitioner`, which decides the
  partition of each outgoing message.

## Installation

```
pip install kafkit
```

## Encoding and decoding

Encoders return `bytes`; decoders read from a binary stream.

```python
import io
from kafkit import codecs

data = codecs.encode_str("test")          # b"\x00\x04test"
assert codecs.decode_str(io.BytesIO(data)) == "test"

names = codecs.encode_strings(["abc", "defg"])
assert codecs.decode_strings(io.BytesIO(names)) == ["abc", "defg"]

assert codecs.encode_bytes(b"\x01\x02\x03") == b"\x00\x00\x00\x03\x01\x02\x03"
```

Decoding from a stream that ends too early raises `UnexpectedEOFError`;
encoding a value that does not fit its type or its length prefix raises
`CodecError`. A string that is not valid UTF-8 raises `StringDecodeError`.
A non-positive length prefix decodes to an empty string, bytes or list.

## Compression

```python
from kafkit import gzip_codec, snappy_codec

packed = snappy_codec.compress(b"This is test")
assert snappy_codec.uncompress(packed) == b"This is test"

assert gzip_codec.uncompress(gzip_codec.compress(b"test")) == b"test"
```

`snappy_codec.uncompress` raises `InvalidSnappyError` on malformed input;
`gzip_codec.uncompress` accepts bytes or a binary stream and raises `OSError`
on malformed input.

`SnappyReader` reads the chunked snappy framing (a magic header with version 1
and compatibility 1, followed by int32-length-prefixed blocks) with
`read(size)` or `readall()`. `validate_stream` checks the header alone and
returns the data after it.

## Partitioning

```python
from kafkit.partitioning import (
    DefaultPartitioner, Partitions, ProduceMessage, Record, Topics,
)

topics = Topics({"foo": Partitions(available_ids=[0, 1, 4], num_all_partitions=5)})
partitioner = DefaultPartitioner()

message = ProduceMessage.from_record(Record.from_key_value("foo", b"foo-key", b"value"))
partitioner.partition(topics, message)
print(message.partition)  # always the same partition for the same key
```

Messages with an explicit, non-negative partition are left alone, as are
messages for unknown topics. Keyed messages go to `xxh32(key) % num_all()`.
Key-less messages are spread round robin over the available partitions.
`DefaultPartitioner` takes an optional hasher factory: any callable returning
an object with `write(data)` and `finish()`.

Record keys and values may be `None`, `str` (encoded as UTF-8) or bytes-like;
`ProduceMessage.from_record` turns empty data into `None`.

## Consumer assignments

```python
from kafkit.assignment import from_map

assignments = from_map({"b": [3, 1, 1], "a": []})
ref = assignments.topic_ref("b")
assert assignments[ref].partitions == (1, 3)
assert [a.topic for a in assignments] == ["a", "b"]
```

Partitions are sorted and deduplicated; an empty tuple means all available
partitions. `topic_ref` returns `None` for a topic that is not assigned.

## What this package does not do

There is no network client here: nothing connects to brokers, loads
metadata, sends produce requests or fetches messages. The package supplies
the encoding, compression, hashing, partition selection and assignment
pieces that such a client is built from.