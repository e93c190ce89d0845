"""Chain metadata and Relay contract addresses used by the gasless flow."""

from typing import Dict

CHAIN_NAMES: Dict[int, str] = {
    1: 'Ethereum',
    10: 'Optimism',
    8453: 'Base',
    42161: 'Arbitrum',
}

NATIVE_PLACEHOLDER = '0x0000000000000000000000000000000000000000'

# The erc20Router is the contract a user's EOA delegates to via EIP-7702. Its
# `delegatecallMulticall` lets the solver run deposit logic in the EOA's context.
# Active v2 deployments share one address across the major EVM chains.
RELAY_ERC20_ROUTER: Dict[int, str] = {
    1: '0xf5042e6ffac5a625d4e7848e0b01373d8eb9e222',
    10: '0xf5042e6ffac5a625d4e7848e0b01373d8eb9e222',
    8453: '0xf5042e6ffac5a625d4e7848e0b01373d8eb9e222',
    42161: '0xf5042e6ffac5a625d4e7848e0b01373d8eb9e222',
}

# Code at a 7702-delegated EOA: 0xef0100 ++ 20-byte delegate address.
EIP7702_DELEGATION_PREFIX = bytes.fromhex('ef0100')
DELEGATE_ADDRESS_LENGTH = 20

DEFAULT_PUBLIC_RPC_URLS: Dict[int, str] = {
    1: 'https://eth.merkle.io',
    10: 'https://mainnet.optimism.io',
    8453: 'https://mainnet.base.org',
    42161: 'https://arb1.arbitrum.io/rpc',
}

ALCHEMY_RPC_SLUGS: Dict[int, str] = {
    1: 'eth-mainnet',
    10: 'opt-mainnet',
    8453: 'base-mainnet',
    42161: 'arb-mainnet',
}

RELAY_STATUS_PATH = '/intents/status/v3'


def chain_name(chain_id: int) -> str:
    return CHAIN_NAMES.get(chain_id, f'Chain {chain_id}')
