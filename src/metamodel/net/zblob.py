#!/usr/bin/env python3
"""
Net - Share Blobs

A Zblob packs a net as base64 of its brotli-compressed JSON. This is the
payload of the editor's ``?z=`` share links.

Older blobs are base64 of a zip archive holding a single ``model.json``
entry (the default empty blob is one of these); they are still readable.
"""

from __future__ import annotations

import base64
import binascii
import io
import zipfile
from dataclasses import dataclass
from urllib.parse import parse_qs, quote, urlsplit

import brotli

from ..exceptions import GraphFormatError
from .io import from_json_str, to_json_str
from .specs import NetSpec

MODEL_ENTRY = "model.json"
SHARE_URL = "https://pflow.dev/p/"

# Editor settings: quality 5, 4MB window
BROTLI_QUALITY = 5
BROTLI_LGWIN = 22

_ZIP_MAGIC = b"PK\x03\x04"

# Legacy zip blob holding an empty petriNet model
EMPTY_NET = (
    "UEsDBAoAAAAAAER3WVjjbbhPbAAAAGwAAAAKAAAAbW9kZWwuanNvbnsKICAibW9kZWxUeXBlIjogInBldHJp"
    "TmV0IiwKICAidmVyc2lvbiI6ICJ2MCIsCiAgInBsYWNlcyI6IHsKICB9LAogICJ0cmFuc2l0aW9ucyI6IHsK"
    "ICB9LAogICJhcmNzIjogWwogIF0KfVBLAQIUAAoAAAAAAER3WVjjbbhPbAAAAGwAAAAKAAAAAAAAAAAAAAAA"
    "AAAAAABtb2RlbC5qc29uUEsFBgAAAAABAAEAOAAAAJQAAAAAAA=="
)


def compress_encode(data: str) -> str:
    """Brotli-compress data and return it as base64"""
    compressed = brotli.compress(data.encode("utf-8"), quality=BROTLI_QUALITY, lgwin=BROTLI_LGWIN)
    return base64.b64encode(compressed).decode("ascii")


def _unzip_model(raw: bytes) -> bytes:
    with zipfile.ZipFile(io.BytesIO(raw)) as archive:
        return archive.read(MODEL_ENTRY)


def decompress_decode(encoded: str) -> str:
    """Inverse of compress_encode; legacy zip blobs are accepted too"""
    try:
        raw = base64.b64decode(encoded, validate=True)
        if raw.startswith(_ZIP_MAGIC):
            data = _unzip_model(raw)
        else:
            data = brotli.decompress(raw)
        return data.decode("utf-8")
    except (binascii.Error, brotli.error, zipfile.BadZipFile, KeyError, UnicodeDecodeError) as e:
        raise GraphFormatError(f"Invalid share blob: {e}") from e


@dataclass
class Zblob:
    """A compressed, base64 encoded net plus sharing metadata

    The default blob is the empty net, tagged "new".
    """
    base64_zipped: str = EMPTY_NET
    title: str = "default"
    description: str = ""
    keywords: str = "new"
    referrer: str = ""
    created_at: str = ""
    id: int = 0

    @classmethod
    def from_string(cls, encoded: str) -> "Zblob":
        return cls(encoded.strip(), keywords="")

    @classmethod
    def from_net(cls, net: NetSpec) -> "Zblob":
        return cls.from_string(compress_encode(to_json_str(net)))

    @classmethod
    def from_url(cls, url: str) -> "Zblob":
        """Extract the ``z`` query parameter of a share link"""
        values = parse_qs(urlsplit(url).query).get("z")
        if not values:
            raise GraphFormatError(f"Share URL has no z= parameter: {url}")
        # parse_qs turns unescaped '+' from base64 into spaces
        return cls.from_string(values[0].replace(" ", "+"))

    def to_net(self) -> NetSpec:
        return from_json_str(decompress_decode(self.base64_zipped))

    def to_url(self, base: str = SHARE_URL) -> str:
        return f"{base}?z={quote(self.base64_zipped, safe='')}"


def decode_share_url(url: str) -> NetSpec:
    """Load the net embedded in a share link"""
    return Zblob.from_url(url).to_net()
