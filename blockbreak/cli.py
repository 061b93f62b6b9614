#!/usr/bin/env python3
"""
blockbreak - ciphertext-only XOR attacks and chosen-plaintext ECB attacks

Usage:
  blockbreak xor-single HEX
  blockbreak xor-detect file.txt                       # one hex ciphertext per line
  blockbreak xor-repeating file.txt [-k N] [-m N]      # base64 ciphertext
  blockbreak ecb-detect file.txt [-b N]                # one hex ciphertext per line
  blockbreak ecb-attack [--url URL | -s B64 [--seed N] [--prefix]] [-v]
  blockbreak serve [-s B64] [--seed N] [--prefix] [--host H] [--port P]
"""

import argparse
import base64
import binascii
import random
from pathlib import Path
from typing import List, Optional

from .config import BLOCK_SIZE, HOST, MAX_KEY_SIZE, PORT
from .ecb.detect import find_ecb_ciphertext
from .ecb.oracle_attack import recover_secret
from .ecb.oracle_server import start_server
from .errors import CrackError
from .oracles import EcbOracle, RemoteOracle
from .xor.repeating_key import crack_repeating_xor
from .xor.single_byte import crack_single_byte_xor, find_single_byte_xor

# Default secret for the demo oracle
DEMO_SECRET = (
    "Um9sbGluJyBpbiBteSA1LjAKV2l0aCBteSByYWctdG9wIGRvd24gc28gbXkg"
    "aGFpciBjYW4gYmxvdwpUaGUgZ2lybGllcyBvbiBzdGFuZGJ5IHdhdmluZyBq"
    "dXN0IHRvIHNheSBoaQpEaWQgeW91IHN0b3A/IE5vLCBJIGp1c3QgZHJvdmUg"
    "YnkK"
)

# Random prefix length range for --prefix
PREFIX_RANGE = (5, 40)


# ---------------- Codecs ----------------
def parse_hex(s: str) -> bytes:
    s = s.strip()
    if s.startswith("0x"):
        s = s[2:]
    return binascii.unhexlify(s)


def read_hex_lines(path: str) -> List[bytes]:
    lines = Path(path).read_text().splitlines()
    return [parse_hex(line) for line in lines if line.strip()]


def read_base64_file(path: str) -> bytes:
    return base64.b64decode("".join(Path(path).read_text().split()), validate=True)


def build_oracle(secret_b64: str, seed: Optional[int], prefix: bool) -> EcbOracle:
    secret = base64.b64decode(secret_b64, validate=True)
    rng = random.Random(seed)
    return EcbOracle(secret, rng, PREFIX_RANGE if prefix else None)


# ---------------- Commands ----------------
def cmd_xor_single(args) -> int:
    cand = crack_single_byte_xor(parse_hex(args.ciphertext))
    print(f"Key: {cand.key} (0x{cand.key:02x})")
    print(f"Plaintext: {cand.text}")
    return 0


def cmd_xor_detect(args) -> int:
    index, cand = find_single_byte_xor(read_hex_lines(args.file), verbose=args.verbose)
    print(f"Line: {index}")
    print(f"Key: {cand.key} (0x{cand.key:02x})")
    print(f"Plaintext: {cand.text}")
    return 0


def cmd_xor_repeating(args) -> int:
    result = crack_repeating_xor(read_base64_file(args.file), key_size=args.key_size,
                                 max_key_size=args.max_key_size, verbose=args.verbose)
    print(f"Key size: {result.key_size}")
    print(f"Key: {result.key!r}")
    print("Plaintext:")
    print(result.text)
    return 0


def cmd_ecb_detect(args) -> int:
    index = find_ecb_ciphertext(read_hex_lines(args.file), args.block_size)
    if index is None:
        print("No ECB ciphertext found.")
        return 1
    print(f"ECB ciphertext on line {index}")
    return 0


def cmd_ecb_attack(args) -> int:
    if args.url:
        oracle = RemoteOracle(args.url)
    else:
        oracle = build_oracle(args.secret, args.seed, args.prefix)
    if args.verbose:
        print("[*] Starting ECB Oracle Attack...")
    secret = recover_secret(oracle, verbose=args.verbose)
    print("Recovered secret:")
    print(secret.decode("utf-8", errors="replace"))
    return 0


def cmd_serve(args) -> int:
    start_server(build_oracle(args.secret, args.seed, args.prefix), args.host, args.port)
    return 0


def build_argparser():
    p = argparse.ArgumentParser(prog="blockbreak", description="Break repeating-key XOR and ECB encryption oracles.")
    sub = p.add_subparsers(dest="cmd", required=True)

    single = sub.add_parser("xor-single", help="Crack a single-byte XOR hex ciphertext.")
    single.add_argument("ciphertext", help="Hex ciphertext")
    single.set_defaults(func=cmd_xor_single)

    detect = sub.add_parser("xor-detect", help="Find the single-byte XOR ciphertext among hex lines.")
    detect.add_argument("file", help="File with one hex ciphertext per line")
    detect.add_argument("-v", "--verbose", action="store_true")
    detect.set_defaults(func=cmd_xor_detect)

    rep = sub.add_parser("xor-repeating", help="Crack a base64 repeating-key XOR ciphertext.")
    rep.add_argument("file", help="Base64 ciphertext file")
    rep.add_argument("-k", "--key-size", type=int, default=None, help="Known key size (skip estimation)")
    rep.add_argument("-m", "--max-key-size", type=int, default=MAX_KEY_SIZE,
                     help=f"Largest key size tried (default {MAX_KEY_SIZE})")
    rep.add_argument("-v", "--verbose", action="store_true")
    rep.set_defaults(func=cmd_xor_repeating)

    ecb = sub.add_parser("ecb-detect", help="Find the ECB ciphertext among hex lines.")
    ecb.add_argument("file", help="File with one hex ciphertext per line")
    ecb.add_argument("-b", "--block-size", type=int, default=BLOCK_SIZE, help=f"Block size (default {BLOCK_SIZE})")
    ecb.set_defaults(func=cmd_ecb_detect)

    attack = sub.add_parser("ecb-attack", help="Byte-at-a-time ECB attack on a local or remote oracle.")
    attack.add_argument("--url", default=None, help="Oracle server base URL (default: local demo oracle)")
    attack.add_argument("-s", "--secret", default=DEMO_SECRET, help="Base64 secret of the local oracle")
    attack.add_argument("--seed", type=int, default=None, help="Seed of the local oracle")
    attack.add_argument("--prefix", action="store_true", help="Local oracle prepends a random prefix")
    attack.add_argument("-v", "--verbose", action="store_true")
    attack.set_defaults(func=cmd_ecb_attack)

    serve = sub.add_parser("serve", help="Serve an ECB oracle over HTTP.")
    serve.add_argument("-s", "--secret", default=DEMO_SECRET, help="Base64 secret appended to every request")
    serve.add_argument("--seed", type=int, default=None, help="Seed for key and prefix")
    serve.add_argument("--prefix", action="store_true", help="Prepend a random prefix")
    serve.add_argument("--host", default=HOST)
    serve.add_argument("--port", type=int, default=PORT)
    serve.set_defaults(func=cmd_serve)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except (CrackError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
