#!/usr/bin/env python3
"""
Tests for compressed share blobs.

Run with: pytest tests/net/test_zblob.py -v
"""

import base64
import io
import zipfile

import brotli
import pytest

from metamodel.exceptions import GraphFormatError
from metamodel.net import NetSpec, Zblob, decode_share_url, from_json_str, to_json_str
from metamodel.net.zblob import (
    EMPTY_NET,
    MODEL_ENTRY,
    SHARE_URL,
    compress_encode,
    decompress_decode,
)


def zip_blob(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return base64.b64encode(buffer.getvalue()).decode()


def test_compress_round_trip():
    assert decompress_decode(compress_encode('{"a":1}')) == '{"a":1}'


def test_blob_is_brotli(counter_net):
    raw = base64.b64decode(Zblob.from_net(counter_net).base64_zipped)
    assert brotli.decompress(raw).decode() == to_json_str(counter_net)


def test_reads_blobs_from_other_encoders(dining_philosophers_json):
    net = from_json_str(dining_philosophers_json)
    encoded = base64.b64encode(brotli.compress(to_json_str(net).encode())).decode()
    assert Zblob.from_string(encoded).to_net() == net
    assert decode_share_url(f"{SHARE_URL}?z={encoded}") == net


def test_encoding_is_deterministic(counter_net):
    assert Zblob.from_net(counter_net).base64_zipped == Zblob.from_net(counter_net).base64_zipped


def test_net_round_trip(dining_philosophers_json):
    net = from_json_str(dining_philosophers_json)
    blob = Zblob.from_net(net)
    assert blob.title == "default"
    assert blob.keywords == ""
    assert blob.to_net() == net


def test_from_string_strips_whitespace(counter_net):
    encoded = Zblob.from_net(counter_net).base64_zipped
    assert Zblob.from_string(f"  {encoded}\n").base64_zipped == encoded


# =============================================================================
# Legacy zip blobs
# =============================================================================


class TestZipBlobs:
    """Zip archives holding model.json are still readable"""

    def test_default_blob_is_empty_net(self):
        blob = Zblob()
        assert blob.base64_zipped == EMPTY_NET
        assert blob.keywords == "new"
        assert blob.id == 0
        assert blob.to_net() == NetSpec("petriNet")

    def test_zip_round_trip(self, counter_net):
        encoded = zip_blob({MODEL_ENTRY: to_json_str(counter_net)})
        assert to_json_str(Zblob.from_string(encoded).to_net()) == to_json_str(counter_net)

    def test_zip_without_model(self):
        with pytest.raises(GraphFormatError):
            decompress_decode(zip_blob({"other.json": "{}"}))


# =============================================================================
# Share URLs
# =============================================================================


class TestShareUrl:
    """?z= links carry the blob as a query parameter"""

    def test_to_url_round_trip(self, counter_net):
        url = Zblob.from_net(counter_net).to_url()
        assert url.startswith(SHARE_URL + "?z=")
        assert to_json_str(decode_share_url(url)) == to_json_str(counter_net)

    def test_unescaped_plus_survives(self, counter_net):
        encoded = Zblob.from_net(counter_net).base64_zipped
        url = f"https://pflow.dev/p/?z={encoded}&m=petri-net"
        assert Zblob.from_url(url).base64_zipped == encoded

    def test_missing_parameter(self):
        with pytest.raises(GraphFormatError):
            Zblob.from_url("https://pflow.dev/p/?m=petri-net")


class TestBadBlobs:
    """Corrupt blobs raise GraphFormatError"""

    def test_not_base64(self):
        with pytest.raises(GraphFormatError):
            Zblob.from_string("not base64!!").to_net()

    def test_not_compressed(self):
        with pytest.raises(GraphFormatError):
            Zblob.from_string(base64.b64encode(b"hello").decode()).to_net()

    def test_corrupt_zip(self):
        with pytest.raises(GraphFormatError):
            Zblob.from_string(base64.b64encode(b"PK\x03\x04broken").decode()).to_net()

    def test_model_not_a_net(self):
        with pytest.raises(GraphFormatError):
            Zblob(compress_encode('{"places": []}')).to_net()
