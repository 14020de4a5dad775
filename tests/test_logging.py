import json
import logging
from pathlib import Path

from ecvault.core.config import LoggingConfig
from ecvault.core.logging import SecureLogFilter, StructuredLogFormatter, get_secure_logger


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


def test_filter_redacts_hex_keys() -> None:
    record = _record("derived %s", "ab" * 32)
    assert SecureLogFilter().filter(record) is True
    assert "ab" * 32 not in record.getMessage()
    assert "[REDACTED]" in record.getMessage()


def test_filter_redacts_named_secrets() -> None:
    record = _record("private_key=00112233 scalar: 42 password=hunter2")
    SecureLogFilter().filter(record)
    message = record.getMessage()
    assert "00112233" not in message
    assert "hunter2" not in message


def test_filter_keeps_ordinary_messages() -> None:
    record = _record("Encrypted %d bytes on %s", 66, "secp256r1")
    SecureLogFilter().filter(record)
    assert record.getMessage() == "Encrypted 66 bytes on secp256r1"


def test_structured_formatter_outputs_json() -> None:
    payload = json.loads(StructuredLogFormatter().format(_record("hello %s", "world")))
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"


def test_console_logger_is_configured_once() -> None:
    config = LoggingConfig(enable_console=True, enable_file=False)
    logger = get_secure_logger("ecvault_test_console", config)
    again = get_secure_logger("ecvault_test_console", config)
    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_file_logger_writes_redacted_json(tmp_path: Path) -> None:
    config = LoggingConfig(
        level="DEBUG",
        enable_console=False,
        enable_file=True,
        enable_json=True,
        log_dir=tmp_path,
    )
    logger = get_secure_logger("ecvault_test_file", config)
    logger.debug("key %s", "cd" * 32)
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    line = (tmp_path / "ecvault_test_file.log").read_text(encoding="utf-8").strip()
    payload = json.loads(line)
    assert "cd" * 32 not in payload["message"]
