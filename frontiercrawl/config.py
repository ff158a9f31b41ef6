import os
import logging
from pathlib import Path
from typing import Optional

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_optional_int_env(name: str) -> Optional[int]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return None


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


DATABASE_URL = get_str_env("DATABASE_URL", "sqlite:///frontier.db")


def temp_dir() -> Optional[str]:
	return get_optional_str_env("FRONTIER_TEMP_DIR")


def decompress_chunk_size() -> int:
	size = get_int_env("FRONTIER_DECOMPRESS_CHUNK_SIZE", 1024)
	if size <= 0:
		logging.warning("FRONTIER_DECOMPRESS_CHUNK_SIZE must be positive, got %d; using 1024", size)
		return 1024
	return size


def log_level() -> str:
	return (os.getenv("FRONTIER_LOG_LEVEL", "INFO") or "INFO").strip().upper()
