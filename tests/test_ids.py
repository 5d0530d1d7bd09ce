import datetime
import re

from common import ids


def test_generate_id_format():
    oid = ids.generate_id("order")
    assert re.fullmatch(r"order-\d{8}-[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", oid)


def test_generate_reference_id_format():
    rid = ids.generate_reference_id("pay")
    assert rid.startswith("PAY-")
    assert re.fullmatch(r"PAY-[0-9a-f]{32}", rid)


def test_uniqueness():
    a = ids.generate_id()
    b = ids.generate_id()
    c = ids.generate_reference_id()
    d = ids.generate_reference_id()
    assert a != b
    assert c != d


def test_generate_id_carries_utc_date():
    before = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%d")
    oid = ids.generate_id("order")
    after = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%d")
    assert oid.split("-")[1] in (before, after)
