"""
cascade_crypto — Live Demo: Six Tiers + Cascade
===============================================
Run:  python examples/demo_cascade.py

Shows every tier encrypting and decrypting a message on its own, then
the full cascade end to end, with timing and sizes printed for each.
Set CASCADE_LOG_LEVEL=DEBUG to watch the pipeline stages.
"""

import sys, os, time, json
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cascade_crypto.config                     import load_config, configure_logging
from cascade_crypto.tiers.tier1_substitution   import SubstitutionCipher
from cascade_crypto.tiers.tier2_polyalphabetic import PolyalphabeticCipher
from cascade_crypto.tiers.tier3_vigenere       import VigenereCipher
from cascade_crypto.tiers.tier4_transposition  import TranspositionCipher
from cascade_crypto.tiers.tier5_vernam         import VernamCipher
from cascade_crypto.tiers.tier6_rsa            import RSACipher, generate_keypair
from cascade_crypto.settings                   import CascadeSettings
from cascade_crypto.cascade                    import CascadePipeline

LINE = "═" * 70
MSG  = b"Hello, World!"

def header(tier, name):
    print(f"\n{LINE}")
    print(f"  Tier {tier} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

configure_logging(load_config())

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  cascade_crypto — Six-Tier Cascade Demo")
print(LINE)
print(f"  Message: {MSG.decode()}\n")

# ── TIER 1 ───────────────────────────────────────────────────────────────────
header(1, "SUBSTITUTION — byte shift 3")
s  = SubstitutionCipher(3)
ct = s.encrypt(MSG)
ok("Encrypted", ct.hex())
ok("Decrypted", s.decrypt(ct).decode())

# ── TIER 2 ───────────────────────────────────────────────────────────────────
header(2, "POLYALPHABETIC — key 'TEST'")
p  = PolyalphabeticCipher("TEST")
ct = p.encrypt(MSG)
ok("Encrypted", ct.hex())
ok("Decrypted", p.decrypt(ct).decode())

# ── TIER 3 ───────────────────────────────────────────────────────────────────
header(3, "VIGENÈRE — key 'SECRETKEY'")
v  = VigenereCipher("SECRETKEY")
ct = v.encrypt(MSG)
ok("Encrypted", ct.hex())
ok("Decrypted", v.decrypt(ct).decode())

# ── TIER 4 ───────────────────────────────────────────────────────────────────
header(4, "TRANSPOSITION — key 'CIPHER'")
t  = TranspositionCipher("CIPHER")
ct = t.encrypt(MSG)
ok("Encrypted", repr(ct))
ok("Block",     f"{t.block_size} bytes, {len(MSG)} → {len(ct)} bytes with padding")
ok("Decrypted", t.decrypt(ct).decode())

# ── TIER 5 ───────────────────────────────────────────────────────────────────
header(5, "ONE-TIME PAD — Vernam XOR")
o        = VernamCipher()
ct, pad  = o.encrypt(MSG)
ok("Pad (base64)", pad)
ok("Encrypted",    ct.hex())
ok("Decrypted",    o.decrypt(ct, pad).decode())

# ── TIER 6 ───────────────────────────────────────────────────────────────────
header(6, "ASYMMETRIC — per-byte RSA, n = 61 × 53")
t0   = time.perf_counter()
pair = generate_keypair()
r    = RSACipher(public_key=pair.public_key, private_key=pair.private_key)
ct   = r.encrypt(MSG)
pt   = r.decrypt(ct)
elapsed = time.perf_counter() - t0
ok("Public key",  pair.public_key.to_json())
ok("Private key", pair.private_key.to_json())
ok("Ciphertext",  ct[:48] + "...")
ok("Round-trip",  f"{elapsed*1000:.2f} ms")
ok("Decrypted",   pt.decode())

# ── CASCADE ──────────────────────────────────────────────────────────────────
header("1-6", "CASCADE — all six tiers, base64 envelope")
settings = CascadeSettings(
    shift=3,
    poly_key="TEST",
    vigenere_key="SECRETKEY",
    transposition_key="CIPHER",
    public_key=pair.public_key,
    private_key=pair.private_key,
)
pipeline = CascadePipeline()
for content in (MSG.decode(), json.dumps({"test": "data", "number": 123})):
    t0              = time.perf_counter()
    envelope, vkey  = pipeline.encrypt(content, settings)
    plain           = pipeline.decrypt(envelope, settings, vkey)
    elapsed         = time.perf_counter() - t0
    ok("Input",       content)
    ok("Envelope",    f"{len(envelope)} chars  {envelope[:40]}...")
    ok("Vernam key",  f"{vkey}  (deliver out of band)")
    ok("Round-trip",  f"{elapsed*1000:.2f} ms")
    ok("Decrypted",   plain.replace("\n", " "))
    print()

failed = pipeline.try_encrypt("", settings)
ok("Empty input", f"{failed.kind} at stage '{failed.layer}'")

# ── Summary ───────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  ALL TIERS COMPLETE")
print(f"  {LINE}")
print("  Tier 1  Monoalphabetic shift             — Caesar over bytes")
print("  Tier 2  Polyalphabetic shift             — Key-cycled alphabets")
print("  Tier 3  Vigenère                          — Second key slot")
print("  Tier 4  Columnar transposition            — Positions, not values")
print("  Tier 5  Vernam one-time pad               — Fresh pad per message")
print("  Tier 6  Textbook RSA (n = 3233)           — Public-key layer")
print(f"  {LINE}")
print("  Educational only. Not a secure system.")
print(LINE + "\n")
