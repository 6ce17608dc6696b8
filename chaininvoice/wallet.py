
#
# Python-chaininvoice -- Ethereum Smart Contract Invoicing Client
#
# Copyright (c) 2022, Dominion Research & Development Corp.
#
# Python-chaininvoice is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  It is also available under alternative (eg. Commercial) licenses, at
# your option.  See the LICENSE file at the top of the source tree.
#
# Python-chaininvoice is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
#

from __future__		import annotations

import json
import logging

from typing		import Callable, Dict, List, Optional, Sequence

import eth_account

from web3		import AsyncWeb3, Web3
from web3.middleware	import SignAndSendRawMiddlewareBuilder

from .util		import commas, into_chain_id, into_hex, is_listlike

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'wallet' )


class WalletProvider:
    """The capabilities we require of a wallet: account authorization, the current chain ID,
    notification of chain changes, and generic contract call/send primitives parameterized by an
    ABI and a target address.

    Derive from this to supply a wallet; the chain-change listener registry is provided here, and
    a derived class invokes self._chain_changed( <chain_id> ) whenever it detects a new network.

    """
    def __init__( self ):
        self._listeners: List[Callable[[int],None]] = []

    async def request_accounts( self ) -> List[str]:
        """Ask for access to the wallet's accounts; may involve the user, and may take a while."""
        raise NotImplementedError()

    async def chain_id( self ) -> int:
        raise NotImplementedError()

    def subscribe( self, listener: Callable[[int],None] ):
        self._listeners.append( listener )

    def unsubscribe( self, listener: Callable[[int],None] ):
        if listener in self._listeners:
            self._listeners.remove( listener )

    def _chain_changed( self, chain_id ):
        chain_id		= into_chain_id( chain_id )
        log.info( f"{self.__class__.__name__} chain changed to {chain_id}; notifying {len( self._listeners )} listeners" )
        for listener in list( self._listeners ):
            listener( chain_id )

    async def call( self, address: str, abi: List[Dict], function: str, *args ):
        """Invoke a free (view) Contract function, returning its decoded result."""
        raise NotImplementedError()

    async def send( self, address: str, abi: List[Dict], function: str, *args, sender: Optional[str] = None ):
        """Transact w/ a Contract function from the sender's account, returning the transaction receipt
        once the transaction is included in a block.

        """
        raise NotImplementedError()


def checksum_args( abi: List[Dict], function: str, args: Sequence ) -> list:
    """Web3 insists on checksummed addresses for any address (or address[]) function argument.
    Normalize any supplied addresses according to the function's ABI inputs.

    """
    try:
        inputs,			= (
            f['inputs'] for f in abi
            if f.get( 'type' ) == 'function' and f.get( 'name' ) == function and len( f['inputs'] ) == len( args )
        )
    except ValueError as exc:
        raise KeyError( f"Failed to find a unique ABI function {function} w/ {len( args )} inputs" ) from exc
    normalized			= []
    for inp,arg in zip( inputs, args ):
        if inp['type'] == 'address':
            arg			= Web3.to_checksum_address( arg )
        elif inp['type'] == 'address[]' and is_listlike( arg ):
            arg			= [ Web3.to_checksum_address( a ) for a in arg ]
        normalized.append( arg )
    return normalized


class Web3Wallet( WalletProvider ):
    """A WalletProvider backed by a JSON-RPC node via web3.py's AsyncWeb3.

    If a private key is supplied, transactions are signed locally w/ that eth_account and sent raw;
    its address is the only account offered.  Otherwise, the node's own (unlocked) accounts are
    offered, and it is expected to sign.

    There is no push notification of network changes from a plain JSON-RPC endpoint; call
    .poll_chain() to detect them and notify any subscribers.

    """
    def __init__(
        self,
        w3_url: str,
        private_key: Optional[str]	= None,
        use_provider			= None,		# eg. AsyncWeb3.AsyncHTTPProvider (the default)
    ):
        super().__init__()
        if use_provider is None:
            assert w3_url.split( ':', 1 )[0].lower() in ( 'http', 'https' ), \
                f"Only HTTP(S) JSON-RPC URLs are supported, not {w3_url}"
            use_provider		= AsyncWeb3.AsyncHTTPProvider
        self._w3		= AsyncWeb3( use_provider( w3_url ) if isinstance( use_provider, type ) else use_provider )
        self._account		= None
        if private_key:
            if not private_key.lower().startswith( '0x' ):
                private_key	= '0x' + private_key
            self._account	= eth_account.Account.from_key( private_key )
            self._w3.middleware_onion.inject(
                SignAndSendRawMiddlewareBuilder.build( self._account ), layer=0 )
            self._w3.eth.default_account = self._account.address
        self._chain_seen	= None

    async def request_accounts( self ) -> List[str]:
        if self._account is not None:
            return [ self._account.address ]
        return list( await self._w3.eth.accounts )

    async def chain_id( self ) -> int:
        chain_id		= await self._w3.eth.chain_id
        if self._chain_seen is None:
            self._chain_seen	= chain_id
        return chain_id

    async def poll_chain( self ) -> int:
        """Query the node's chain ID, notifying subscribers if it differs from the last one seen."""
        last			= self._chain_seen
        self._chain_seen	= chain_id = await self._w3.eth.chain_id
        if last is not None and chain_id != last:
            self._chain_changed( chain_id )
        return chain_id

    def _function( self, address, abi, function, args ):
        contract		= self._w3.eth.contract( address=Web3.to_checksum_address( address ), abi=abi )
        return getattr( contract.functions, function )( *checksum_args( abi, function, args ))

    async def call( self, address, abi, function, *args ):
        return await self._function( address, abi, function, args ).call()

    async def send( self, address, abi, function, *args, sender=None ):
        sender			= sender or ( self._account.address if self._account else None )
        assert sender, \
            f"A sender account is required to transact w/ {function}( {commas( args )} )"
        tx_hash			= await self._function( address, abi, function, args ).transact({
            'from':	Web3.to_checksum_address( sender ),
        })
        log.info( f"Web3 Transact {function} hash: {into_hex( tx_hash )}" )
        receipt			= await self._w3.eth.wait_for_transaction_receipt( tx_hash )
        log.info( f"Web3 Transact {function} receipt: {json.dumps( dict( receipt ), indent=4, default=str )}" )
        return receipt
