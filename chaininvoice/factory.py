
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

from typing		import List, Optional

from .contract		import Contract, invoice_factory_abi
from .defaults		import DECIMALS, FACTORY_ADDRESS
from .errors		import NotConnected, ReadFailed, TransactionFailed
from .invoice		import InvoiceDraft
from .session		import ChainSession
from .units		import to_base_units
from .util		import into_hex, is_mapping

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'factory' )


class InvoiceFactory( Contract ):
    """Access our deployed InvoiceFactory Contract, on behalf of the ChainSession's current account.

    The session is consulted on every operation, so an account switch is observed by the next call.
    Nothing is retried; every failure is reported to the caller.

    """
    def __init__( self, chain: ChainSession, address: Optional[str] = None, decimals: int = DECIMALS ):
        self._chain		= chain
        self._decimals		= decimals
        super().__init__( chain.provider, address or FACTORY_ADDRESS, abi=invoice_factory_abi )

    def _account( self, what ) -> str:
        session			= self._chain.session
        if not session.connected:
            raise NotConnected( f"Connect a wallet account before attempting to {what}" )
        return session.wallet_address

    async def create_invoice( self, draft: InvoiceDraft ):
        """Deploy a new Invoice contract via the factory, returning the transaction receipt once the
        transaction has been included in a block.

        """
        sender			= self._account( "create an invoice" )
        total			= int( to_base_units( draft.total_amount, decimals=self._decimals ))
        shares			= draft.share_values()
        try:
            receipt		= await self._send(
                'createInvoice', list( draft.recipients ), shares, total, draft.description,
                sender	= sender,
            )
        except Exception as exc:
            log.warning( f"Failed to create invoice: {exc}" )
            raise TransactionFailed( f"Failed to create invoice: {exc}" ) from exc
        if not is_mapping( receipt ) or not receipt.get( 'transactionHash' ):
            raise TransactionFailed( f"Invoice creation returned no transaction receipt: {receipt!r}" )
        if not receipt.get( 'status', 1 ):
            raise TransactionFailed(
                f"Invoice creation transaction {into_hex( receipt['transactionHash'] )} was reverted" )
        return receipt

    async def list_invoice_addresses( self, owner: Optional[str] = None ) -> List[str]:
        """The Invoice contract addresses associated w/ owner (default: the connected account), in
        the order the factory reports them.

        """
        account			= self._account( "list invoices" )
        try:
            addresses		= list( await self.getUserInvoices( owner or account ))
        except Exception as exc:
            log.warning( f"Failed to fetch invoices for {owner or account}: {exc}" )
            raise ReadFailed( f"Failed to fetch invoices: {exc}" ) from exc
        return addresses
