
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

import logging

from dataclasses	import dataclass, replace
from enum		import Enum
from typing		import Callable, Optional

from .errors		import NoWalletProvider, WalletRequestRejected, ReadFailed
from .util		import into_chain_id
from .wallet		import WalletProvider

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'session' )


class ConnectionState( Enum ):
    Disconnected	= 0
    Connecting		= 1
    Connected		= 2


@dataclass( eq=True, frozen=True )
class Session:
    """Who we are, and on what network.  Only a ChainSession produces new ones."""
    wallet_address: Optional[str] = None
    chain_id: Optional[int] = None
    state: ConnectionState = ConnectionState.Disconnected

    @property
    def connected( self ):
        return self.state is ConnectionState.Connected and bool( self.wallet_address )


class Subscription:
    """A handle on a WalletProvider chain-change listener; close it to unsubscribe.  May be used as
    a context manager.

    """
    def __init__( self, provider: WalletProvider, listener: Callable[[int],None] ):
        self._provider		= provider
        self._listener		= listener
        provider.subscribe( listener )

    @property
    def closed( self ):
        return self._provider is None

    def close( self ):
        if self._provider is not None:
            self._provider.unsubscribe( self._listener )
            self._provider	= None

    def __enter__( self ):
        return self

    def __exit__( self, *exc ):
        self.close()


class ChainSession:
    """Owns the binding between us and a wallet provider: the connected account, and the current
    chain ID.  The provider is injected; None models the absence of any wallet.

    A network change reported by the provider updates only .session.chain_id; the account and
    connection state are untouched.  Deciding whether the new chain is acceptable is left to the
    caller (see InvoiceClient.network_warning).

    """
    def __init__( self, provider: Optional[WalletProvider] ):
        self._provider		= provider
        self._session		= Session()
        self._subscription: Optional[Subscription] = None
        self._changes		= 0		# Chain changes signalled by the provider

    @property
    def session( self ) -> Session:
        return self._session

    @property
    def provider( self ) -> WalletProvider:
        if self._provider is None:
            raise NoWalletProvider( "No Ethereum wallet found; please install or configure a wallet" )
        return self._provider

    @property
    def initialized( self ):
        return self._subscription is not None and not self._subscription.closed

    async def initialize( self ) -> Subscription:
        """Confirm we have a wallet provider, capture its current chain ID, and listen for chain
        changes.  Returns the (existing, if already initialized) Subscription.

        """
        provider		= self.provider
        if self.initialized:
            return self._subscription
        self._subscription	= Subscription( provider, self._chain_changed )
        try:
            await self.get_chain_id()
        except Exception:
            self._subscription.close()
            raise
        log.info( f"Initialized {provider.__class__.__name__} on chain {self._session.chain_id}" )
        return self._subscription

    async def connect( self ) -> str:
        """Request account access from the provider; returns the first authorized account.  May
        wait indefinitely for the user; the provider owns any timeout.

        """
        provider		= self.provider
        self._session		= replace( self._session, state=ConnectionState.Connecting )
        try:
            accounts		= await provider.request_accounts()
            if not accounts:
                raise WalletRequestRejected( "The wallet authorized no accounts" )
        except WalletRequestRejected:
            self._session	= replace( self._session, state=ConnectionState.Disconnected, wallet_address=None )
            raise
        except Exception as exc:
            self._session	= replace( self._session, state=ConnectionState.Disconnected, wallet_address=None )
            log.warning( f"Failed to connect wallet: {exc}" )
            raise WalletRequestRejected( f"Failed to connect wallet: {exc}" ) from exc
        account			= accounts[0]
        self._session		= replace( self._session, state=ConnectionState.Connected, wallet_address=account )
        log.info( f"Connected account {account} on chain {self._session.chain_id}" )
        return account

    def disconnect( self ):
        self._session		= replace( self._session, state=ConnectionState.Disconnected, wallet_address=None )

    async def get_chain_id( self ) -> int:
        """Query the provider's chain ID.  If the provider signals a chain change while the query is
        in flight, the signalled chain ID is newer, and is retained.

        """
        changes			= self._changes
        try:
            chain_id		= into_chain_id( await self.provider.chain_id() )
        except NoWalletProvider:
            raise
        except Exception as exc:
            raise ReadFailed( f"Failed to read the wallet's chain ID: {exc}" ) from exc
        if changes != self._changes:
            log.info( f"Ignoring chain {chain_id} read; superseded by chain {self._session.chain_id}" )
            return self._session.chain_id
        self._session		= replace( self._session, chain_id=chain_id )
        return chain_id

    def _chain_changed( self, chain_id ):
        chain_id		= into_chain_id( chain_id )
        self._changes	       += 1
        if chain_id != self._session.chain_id:
            log.warning( f"Wallet network changed from chain {self._session.chain_id} to {chain_id}" )
        self._session		= replace( self._session, chain_id=chain_id )

    def dispose( self ):
        """Release the provider chain-change subscription; may be re-initialized later."""
        if self._subscription is not None:
            self._subscription.close()
            self._subscription	= None

    async def __aenter__( self ):
        await self.initialize()
        return self

    async def __aexit__( self, *exc ):
        self.dispose()
