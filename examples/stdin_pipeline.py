"""Example driver: normalize newline-delimited vendor records from stdin.

Run with:
    OTLPBRIDGE_SOURCE=sevone python examples/stdin_pipeline.py < records.ndjson

Settings come from OTLPBRIDGE_* environment variables (see
``otlpbridge.Settings.from_env``). JSON output is written one document per
line; protobuf output is written as length-prefixed messages (4-byte
big-endian length, then the serialized request).
"""

import sys

from otlpbridge import RecordProcessor, Settings, configure_logging, get_logger

logger = get_logger("examples.stdin_pipeline")


def main(topic: str = "stdin") -> int:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    processor = RecordProcessor.from_settings(settings)

    emitted = skipped = 0
    for line in sys.stdin.buffer:
        if not line.strip() or not processor.admit():
            continue
        payload = processor.process(line, topic)
        if payload is None:
            skipped += 1
            continue
        if isinstance(payload, bytes):
            sys.stdout.buffer.write(len(payload).to_bytes(4, "big") + payload)
        else:
            sys.stdout.write(payload + "\n")
        emitted += 1

    sys.stdout.flush()
    logger.info("Emitted %d payloads, skipped %d records", emitted, skipped)
    return 0


if __name__ == "__main__":
    sys.exit(main())
