"""
cascade_crypto — Cascade, Settings and Config Tests
===================================================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import base64
import json
import random
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from cascade_crypto.cascade            import CascadePipeline, CascadeCiphertext, canonicalize
from cascade_crypto.config             import CascadeConfig, load_config
from cascade_crypto.errors             import (InvalidKeyError, MissingKeyError,
                                               MalformedCiphertextError, EmptyInputError)
from cascade_crypto.result             import Outcome, attempt
from cascade_crypto.settings           import CascadeSettings, validate_settings
from cascade_crypto.tiers.tier6_rsa    import RSACipher, RSAPublicKey, generate_keypair
from cascade_crypto.tiers.tier1_substitution   import SubstitutionCipher
from cascade_crypto.tiers.tier2_polyalphabetic import PolyalphabeticCipher
from cascade_crypto.tiers.tier3_vigenere       import VigenereCipher
from cascade_crypto.tiers.tier4_transposition  import TranspositionCipher
from cascade_crypto.tiers.tier5_vernam         import VernamCipher

MSG = "Hello, World!"

CASES = [
    "Hello, World!",
    "Special chars: !@#$%^&*()",
    " Unicode test é中",
    "A" * 1000,
    "line one\nline two\n",
]


@pytest.fixture
def settings():
    pair = generate_keypair()
    return CascadeSettings(
        shift=3,
        poly_key="TEST",
        vigenere_key="SECRETKEY",
        transposition_key="CIPHER",
        public_key=pair.public_key,
        private_key=pair.private_key,
    )


@pytest.fixture
def pipeline():
    return CascadePipeline(config=CascadeConfig())


# ── Round trips ──────────────────────────────────────────────────────────────
def test_cascade_hello_world(pipeline, settings):
    envelope, key = pipeline.encrypt(MSG, settings)
    assert MSG not in base64.b64decode(envelope).decode("ascii")
    assert pipeline.decrypt(envelope, settings, key) == MSG

@pytest.mark.parametrize("text", CASES)
def test_cascade_roundtrip(pipeline, settings, text):
    result = pipeline.encrypt(text, settings)
    assert isinstance(result, CascadeCiphertext)
    assert pipeline.decrypt(result.envelope, settings, result.vernam_key) == text

def test_cascade_accepts_bytes(pipeline, settings):
    envelope, key = pipeline.encrypt(MSG.encode("utf-8"), settings)
    assert pipeline.decrypt(envelope.encode("ascii"), settings, key) == MSG

def test_cascade_json_is_pretty_printed(pipeline, settings):
    raw = '{"test": "data",   "number": 123}'
    envelope, key = pipeline.encrypt(raw, settings)
    out = pipeline.decrypt(envelope, settings, key)
    assert out == '{\n  "test": "data",\n  "number": 123\n}'
    assert json.loads(out) == {"test": "data", "number": 123}

def test_cascade_json_indent_from_config(settings):
    p = CascadePipeline(config=CascadeConfig(json_indent=4))
    envelope, key = p.encrypt("[1, 2]", settings)
    assert p.decrypt(envelope, settings, key) == "[\n    1,\n    2\n]"

def test_canonicalize():
    assert canonicalize('{ "a" : [1, 2] }') == '{"a":[1,2]}'
    assert canonicalize("not json {") == "not json {"
    assert canonicalize("NaN") == "NaN"
    assert canonicalize('"é"') == '"é"'

def test_envelope_tolerates_trailing_newline(pipeline, settings):
    envelope, key = pipeline.encrypt(MSG, settings)
    assert pipeline.decrypt(envelope + "\n", settings, key) == MSG

# ── Stage order ──────────────────────────────────────────────────────────────
def test_stage_order():
    assert CascadePipeline.STAGES == (
        "substitution", "polyalphabetic", "vigenere", "transposition", "vernam", "rsa",
    )

def test_cascade_matches_tiers_chained_by_hand(settings):
    p = CascadePipeline(rng=random.Random(3), config=CascadeConfig())
    envelope, key = p.encrypt(MSG, settings)

    data = MSG.encode("utf-8")
    data = SubstitutionCipher(3).encrypt(data)
    data = PolyalphabeticCipher("TEST").encrypt(data)
    data = VigenereCipher("SECRETKEY").encrypt(data)
    data = TranspositionCipher("CIPHER").encrypt(data)
    data, pad = VernamCipher(random.Random(3)).encrypt(data)
    expected = RSACipher(public_key=settings.public_key).encrypt(data)

    assert key == pad
    assert base64.b64decode(envelope).decode("ascii") == expected
    assert p.decrypt(envelope, settings, key) == MSG

# ── Vernam key handling ──────────────────────────────────────────────────────
def test_vernam_key_matches_transposition_output(pipeline, settings):
    _, key = pipeline.encrypt(MSG, settings)
    # 13 bytes padded to a multiple of len("CIPHER")
    assert len(base64.b64decode(key)) == 18

def test_vernam_key_is_fresh_per_call(pipeline, settings):
    _, k1 = pipeline.encrypt(MSG, settings)
    _, k2 = pipeline.encrypt(MSG, settings)
    assert k1 != k2

def test_vernam_key_not_inside_envelope(pipeline, settings):
    envelope, key = pipeline.encrypt(MSG, settings)
    assert key not in envelope

def test_seeded_pipelines_agree(settings):
    a = CascadePipeline(rng=random.Random(42), config=CascadeConfig())
    b = CascadePipeline(rng=random.Random(42), config=CascadeConfig())
    assert a.encrypt(MSG, settings) == b.encrypt(MSG, settings)

def test_concurrent_calls_are_independent(pipeline, settings):
    texts = [f"message number {i}" for i in range(32)]

    def roundtrip(text):
        envelope, key = pipeline.encrypt(text, settings)
        return key, pipeline.decrypt(envelope, settings, key)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(roundtrip, texts))
    assert [r[1] for r in results] == texts
    assert len({r[0] for r in results}) == len(texts)

# ── Failures carry kind and layer ────────────────────────────────────────────
def test_missing_public_key(pipeline, settings):
    bare = settings.model_copy(update={"public_key": None})
    with pytest.raises(MissingKeyError) as exc:
        pipeline.encrypt(MSG, bare)
    assert exc.value.layer == "rsa"

def test_missing_private_key(pipeline, settings):
    envelope, key = pipeline.encrypt(MSG, settings)
    bare = settings.model_copy(update={"private_key": None})
    with pytest.raises(MissingKeyError) as exc:
        pipeline.decrypt(envelope, bare, key)
    assert exc.value.layer == "rsa"

def test_missing_vernam_key(pipeline, settings):
    envelope, _ = pipeline.encrypt(MSG, settings)
    with pytest.raises(MissingKeyError) as exc:
        pipeline.decrypt(envelope, settings, "")
    assert exc.value.layer == "vernam"

def test_wrong_length_vernam_key(pipeline, settings):
    envelope, _ = pipeline.encrypt(MSG, settings)
    _, other = pipeline.encrypt(MSG * 3, settings)
    with pytest.raises(InvalidKeyError) as exc:
        pipeline.decrypt(envelope, settings, other)
    assert exc.value.layer == "vernam"
    assert str(exc.value).startswith("[vernam]")

def test_empty_content(pipeline, settings):
    with pytest.raises(EmptyInputError) as exc:
        pipeline.encrypt("", settings)
    assert exc.value.layer == "rsa"

def test_envelope_not_base64(pipeline, settings):
    with pytest.raises(MalformedCiphertextError) as exc:
        pipeline.decrypt("***", settings, "AAAA")
    assert exc.value.layer == "envelope"

def test_envelope_with_non_integer_token(pipeline, settings):
    envelope = base64.b64encode(b"2790,abc").decode("ascii")
    with pytest.raises(MalformedCiphertextError) as exc:
        pipeline.decrypt(envelope, settings, "AAA=")
    assert exc.value.layer == "rsa"

def test_try_encrypt_returns_outcome(pipeline, settings):
    ok = pipeline.try_encrypt(MSG, settings)
    assert ok.ok and ok.kind is None
    envelope, key = ok.unwrap()

    failed = pipeline.try_encrypt("", settings)
    assert not failed.ok
    assert failed.kind == "EmptyInputError"
    assert failed.layer == "rsa"
    assert failed.client_error is True
    with pytest.raises(EmptyInputError):
        failed.unwrap()

    back = pipeline.try_decrypt(envelope, settings, key)
    assert back.unwrap() == MSG

def test_attempt_tags_layer():
    out = attempt(SubstitutionCipher, "x", layer="substitution")
    assert isinstance(out, Outcome)
    assert out.kind == "InvalidKeyError"
    assert out.layer == "substitution"

def test_attempt_lets_bugs_through():
    with pytest.raises(ZeroDivisionError):
        attempt(lambda: 1 // 0)

# ── Settings ─────────────────────────────────────────────────────────────────
def test_settings_from_ui_payload(pipeline):
    pair = generate_keypair()
    payload = {
        "shift": 3,
        "polyKey": "TEST",
        "vigenereKey": "SECRETKEY",
        "transpositionKey": "CIPHER",
        "publicKey": pair.public_key.to_json(),
        "privateKey": pair.private_key.to_json(),
    }
    s = CascadeSettings.model_validate(payload)
    assert s.public_key == RSAPublicKey(e=17, n=3233)
    envelope, key = pipeline.encrypt(MSG, payload)
    assert pipeline.decrypt(envelope, payload, key) == MSG

@pytest.mark.parametrize("field,value", [
    ("shift", 0),
    ("shift", 256),
    ("poly_key", "A"),
    ("vigenere_key", ""),
    ("transposition_key", "ab-c"),
    ("transposition_key", "a"),
    ("public_key", '{"e": "x", "n": "3233"}'),
])
def test_settings_rejects(field, value):
    fields = dict(shift=3, poly_key="TEST", vigenere_key="SECRETKEY", transposition_key="CIPHER")
    fields[field] = value
    with pytest.raises(ValidationError):
        CascadeSettings(**fields)

def test_settings_are_frozen(settings):
    with pytest.raises(ValidationError):
        settings.shift = 5

def test_validate_settings(settings):
    assert validate_settings(settings, "encrypt") == (True, [])
    ok, errs = validate_settings(settings, "decrypt")
    assert not ok and errs == ["Vernam key is required for decryption"]
    assert validate_settings(settings, "decrypt", vernam_key="AAAA")[0]

    bare = settings.model_copy(update={"public_key": None, "private_key": None})
    assert validate_settings(bare, "encrypt")[1] == ["Public key is required for encryption"]
    assert not validate_settings(bare, "sign")[0]

# ── Config ───────────────────────────────────────────────────────────────────
def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("CASCADE_LOG_LEVEL", "debug")
    monkeypatch.setenv("CASCADE_JSON_INDENT", "4")
    load_config.cache_clear()
    try:
        cfg = load_config()
        assert cfg.log_level == "DEBUG"
        assert cfg.json_indent == 4
        assert cfg.text_encoding == "utf-8"
    finally:
        load_config.cache_clear()

@pytest.mark.parametrize("kwargs", [
    {"log_level": "LOUD"},
    {"text_encoding": "no-such-codec"},
    {"json_indent": -1},
])
def test_config_rejects(kwargs):
    with pytest.raises(ValidationError):
        CascadeConfig(**kwargs)
