"""
Process-wide constants shared by the attacks.

Every value here can be overridden per call (keyword arguments) or per run
(command line flags), nothing is mutated at runtime.
"""

# AES block size in bytes
BLOCK_SIZE = 16

# Filler byte used to pad chosen plaintexts
FILLER = b"A"

# Two distinct bytes whose difference locates the end of an unknown prefix
PROBE_BYTES = (b"B", b"C")

# Largest block size tried when probing an oracle
MAX_BLOCK_SIZE = 64

# Repeating-key XOR: largest key size tried and blocks compared per size
MAX_KEY_SIZE = 40
KEY_SIZE_BLOCKS = 4

# English letters ranked by frequency, commonest first (space included)
WEIGHTS = "ETAOIN SHRDLU"

# Oracle server
HOST, PORT = "localhost", 1337
