import hashlib
import re

from blobcache.infrastructure.cache.key_encoder import encode_key

HEX_64 = re.compile(r"^[0-9a-f]{64}$")


def test_encode_key_matches_sha256_hexdigest():
    key = "https://example.com/images/cat.png"
    assert encode_key(key) == hashlib.sha256(key.encode("utf-8")).hexdigest()


def test_encode_key_is_stable_across_calls():
    assert encode_key("avatar-42") == encode_key("avatar-42")


def test_known_digest_is_stable_across_processes():
    # Digest of the empty string is fixed by SHA-256 itself.
    assert encode_key("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_different_keys_give_different_identifiers():
    assert encode_key("a") != encode_key("b")


def test_identifier_is_a_safe_path_segment():
    for key in ["../../etc/passwd", "a/b\\c", "with space?&=#", "ключ", "\x00\x01"]:
        identifier = encode_key(key)
        assert HEX_64.match(identifier), identifier
        assert "/" not in identifier and "." not in identifier


def test_unencodable_key_falls_back_to_empty_key():
    lone_surrogate = "\ud800"
    assert encode_key(lone_surrogate) == encode_key("")
