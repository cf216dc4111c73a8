"""
Protocol constants.

Lengths, domain-separation prefixes and fee floors shared by the codecs and
signers.
"""

# Key and digest sizes
PUBLIC_KEY_LEN = 32
SEED_LEN = 32
SECRET_KEY_LEN = 64
SIGNATURE_LEN = 64
HASH_LEN = 32
CHECKSUM_LEN = 4
ADDRESS_LEN = 58

# Mnemonic
MNEMONIC_WORDS = 25
BITS_PER_WORD = 11

# Domain-separation prefixes
TX_PREFIX = b"TX"
TX_GROUP_PREFIX = b"TG"
BID_PREFIX = b"aB"
MULTISIG_ADDR_PREFIX = b"MultisigAddr"

# Multisig
MULTISIG_VERSION = 1

# Fees
MIN_TXN_FEE = 1000
MICROALGOS_PER_ALGO = 1_000_000

MAX_UINT64 = 2**64 - 1
