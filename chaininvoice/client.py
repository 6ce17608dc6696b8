
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
import os

from typing		import List, Optional

from .defaults		import DECIMALS, EXPECTED_CHAIN_ID, FACTORY_ADDRESS
from .errors		import InvoiceError, EmptyDraft, InvalidDraft
from .factory		import InvoiceFactory
from .invoice		import InvoiceAggregator, InvoiceDraft, InvoiceRecord
from .session		import ChainSession, Session
from .units		import to_base_units
from .util		import into_chain_id, into_hex
from .wallet		import WalletProvider

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'client' )


class InvoiceClient:
    """The operations a user interface performs: connect_and_load, submit_invoice and
    refresh_invoices, and the state it displays.

    Every failure of an operation is reported the same way: the operation returns None, and .error
    holds a message suitable for display.  The .error is cleared as each operation starts, and any
    previously loaded .invoices are retained when an operation fails.

    A wallet on a network other than the expected_chain_id is not an error; .network_warning
    describes the situation, and operations are still attempted.

    """
    def __init__(
        self,
        provider: Optional[WalletProvider],
        factory_address: Optional[str]	= None,
        expected_chain_id: Optional[int]	= None,
        decimals: int			= DECIMALS,
        shares_total: Optional[int]	= None,		# If supplied, shares must sum to this total
    ):
        self._chain		= ChainSession( provider )
        self._factory_address	= factory_address or os.getenv( 'INVOICE_FACTORY_ADDRESS' ) or FACTORY_ADDRESS
        if expected_chain_id is None:
            chain_id_env	= os.getenv( 'INVOICE_CHAIN_ID' )
            expected_chain_id	= into_chain_id( chain_id_env ) if chain_id_env else EXPECTED_CHAIN_ID
        self.expected_chain_id	= expected_chain_id
        self._decimals		= decimals
        self._shares_total	= shares_total
        self._factory: Optional[InvoiceFactory] = None
        self._aggregator: Optional[InvoiceAggregator] = None

        self.draft		= InvoiceDraft()
        self.error: str		= ''
        self.tx_hash: str	= ''
        self.invoices: List[InvoiceRecord] = []
        self.loading: bool	= False

    @property
    def session( self ) -> Session:
        return self._chain.session

    @property
    def account( self ) -> Optional[str]:
        return self._chain.session.wallet_address

    @property
    def network_warning( self ) -> Optional[str]:
        chain_id		= self._chain.session.chain_id
        if chain_id is None or chain_id == self.expected_chain_id:
            return None
        return f"Wallet is connected to chain {chain_id}; please switch to chain {self.expected_chain_id}"

    @property
    def factory( self ) -> InvoiceFactory:
        if self._factory is None:
            self._factory	= InvoiceFactory( self._chain, self._factory_address, decimals=self._decimals )
        return self._factory

    @property
    def aggregator( self ) -> InvoiceAggregator:
        if self._aggregator is None:
            self._aggregator	= InvoiceAggregator( self._chain.provider, decimals=self._decimals )
        return self._aggregator

    def validate( self, draft: InvoiceDraft ):
        """Confirm the draft is submittable, w/o any network access."""
        if not draft.recipients:
            raise EmptyDraft( "An invoice requires at least one recipient" )
        if len( draft.recipients ) != len( draft.shares ):
            raise EmptyDraft(
                f"Each of the {len( draft.recipients )} recipients requires a share; found {len( draft.shares )} shares" )
        if not all( draft.recipients ):
            raise InvalidDraft( "Every recipient requires an address" )
        shares			= draft.share_values()
        if self._shares_total is not None and sum( shares ) != self._shares_total:
            raise InvalidDraft( f"Shares total {sum( shares )}; they must total {self._shares_total}" )
        to_base_units( draft.total_amount, decimals=self._decimals )

    async def _operation( self, what, operation ):
        """Run an operation, funnelling any InvoiceError into .error."""
        self.error		= ''
        self.loading		= True
        try:
            return await operation()
        except InvoiceError as exc:
            log.warning( f"Failed to {what}: {exc}" )
            self.error		= str( exc )
            return None
        finally:
            self.loading	= False

    async def _initialize( self ):
        await self._chain.initialize()
        if warning := self.network_warning:
            log.warning( warning )

    async def _load( self ) -> List[InvoiceRecord]:
        addresses		= await self.factory.list_invoice_addresses()
        return await self.aggregator.hydrate( addresses )

    async def connect_and_load( self ) -> Optional[str]:
        """Connect the wallet, and load the connected account's invoices.  Returns the account."""
        async def operation():
            await self._initialize()
            account		= await self._chain.connect()
            self.invoices	= await self._load()
            return account
        return await self._operation( "connect wallet", operation )

    async def submit_invoice( self, draft: Optional[InvoiceDraft] = None ):
        """Create an invoice on-chain from the draft (default: self.draft), then reload the invoices.
        Returns the transaction receipt.

        """
        if draft is None:
            draft		= self.draft

        async def operation():
            self.validate( draft )
            await self._initialize()
            receipt		= await self.factory.create_invoice( draft )
            self.tx_hash	= into_hex( receipt['transactionHash'] )
            log.info( f"Created invoice for {draft.total_amount}: transaction {self.tx_hash}" )
            if draft is self.draft:
                self.draft	= InvoiceDraft()
            self.invoices	= await self._load()
            return receipt
        return await self._operation( "create invoice", operation )

    async def refresh_invoices( self ) -> Optional[List[InvoiceRecord]]:
        async def operation():
            await self._initialize()
            self.invoices	= await self._load()
            return self.invoices
        return await self._operation( "fetch invoices", operation )

    def close( self ):
        self._chain.dispose()

    async def __aenter__( self ):
        return self

    async def __aexit__( self, *exc ):
        self.close()
