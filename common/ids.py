"""Helpers for generating reference IDs.

IDs use either a dated prefix (``order-YYYYMMDD-<uuid4>``) or a short
uppercase prefix followed by a UUID4 hex string (``PAY-<uuid4-hex>``).
"""
from __future__ import annotations

import datetime
import uuid


def generate_id(prefix: str = "order") -> str:
	"""Build the sandbox's internal ``_id`` for a stored record.

	The UTC creation date sits between the prefix and a UUID4, so records
	created on the same UTC day share a date segment, e.g.
	``order-<YYYYMMDD>-<uuid4>``.
	"""
	date_str = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%d")
	unique = str(uuid.uuid4())
	return f"{prefix}-{date_str}-{unique}"


def generate_reference_id(prefix: str = "SEED") -> str:
	"""Generate a short reference ID such as ``PAY-<uuid4-hex>``.

	Returns
	-------
	str
		The uppercased prefix, a dash and a lowercase hex UUID4 (no dashes).
	"""
	return f"{prefix.upper()}-{uuid.uuid4().hex}"


if __name__ == "__main__":
	print("Sample Order ID:", generate_id("order"))
	print("Sample Payment ID:", generate_reference_id("PAY"))
