from .mocks import MockNetworkClient, MultiKeyAccount
from .factories import (
    bcs_bytes,
    bcs_nested_bytes,
    bcs_u64,
    mk_address,
    mk_ed25519_keypair,
    mk_raw_transaction,
    mk_transaction,
    mk_type_tag,
    mk_upgrade_package_transaction,
    write_struct_tag,
)

__all__ = [
    "MockNetworkClient",
    "MultiKeyAccount",
    "bcs_bytes",
    "bcs_nested_bytes",
    "bcs_u64",
    "mk_address",
    "mk_ed25519_keypair",
    "mk_raw_transaction",
    "mk_transaction",
    "mk_type_tag",
    "mk_upgrade_package_transaction",
    "write_struct_tag",
]
