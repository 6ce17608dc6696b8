
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

import asyncio
import logging

from dataclasses	import dataclass, field
from typing		import List, Optional, Sequence, Tuple, Union

from tabulate		import tabulate

from .contract		import Contract, invoice_abi
from .defaults		import DECIMALS, INVOICE_FORMAT
from .errors		import InvalidAmountFormat, InvalidDraft
from .units		import from_base_units
from .util		import commas, is_listlike, timer
from .wallet		import WalletProvider

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'invoice' )


@dataclass
class InvoiceDraft:
    """An invoice being composed; recipients and shares are parallel sequences.  Shares may be
    supplied as integer strings (eg. from a form), and are percentages: they should total 100,
    which the Invoice contract itself enforces.

    """
    recipients: List[str] = field( default_factory=list )
    shares: List[Union[int,str]] = field( default_factory=list )
    total_amount: str = ''
    description: str = ''

    def add_recipient( self, recipient: str = '', share: Union[int,str] = '' ):
        self.recipients.append( recipient )
        self.shares.append( share )

    def update_recipient( self, index: int, recipient: str ):
        self.recipients[index]	= recipient

    def update_share( self, index: int, share: Union[int,str] ):
        self.shares[index]	= share

    def remove_recipient( self, index: int ):
        del self.recipients[index]
        del self.shares[index]

    def share_values( self ) -> List[int]:
        """The shares as non-negative ints, or raise InvalidDraft."""
        values			= []
        for i,share in enumerate( self.shares ):
            try:
                if isinstance( share, bool ):
                    raise ValueError( "a bool is not a share" )
                value		= int( share.strip() if isinstance( share, str ) else share )
                if value != share and not isinstance( share, str ):
                    raise ValueError( "shares must be whole numbers" )
            except ( TypeError, ValueError ) as exc:
                raise InvalidDraft( f"Share {share!r} for recipient {i+1} is not an integer: {exc}" ) from exc
            if value < 0:
                raise InvalidDraft( f"Share {share!r} for recipient {i+1} is negative" )
            values.append( value )
        return values


@dataclass( eq=True, frozen=True )
class InvoiceRecord:
    """A snapshot of one Invoice contract's details; amounts are human decimal strings."""
    address: str
    recipients: Tuple[str, ...]
    shares: Tuple[int, ...]
    total_amount: str
    description: str
    is_paid: bool
    paid_amount: str
    payer: Optional[str] = None

    @classmethod
    def decode( cls, address: str, details, decimals: int = DECIMALS ) -> Optional[InvoiceRecord]:
        """Decode a getInvoiceDetails() result tuple:

            (recipients, shares, totalAmount, description, isPaid, paidAmount[, payer])

        Returns None (rather than raising) if the details are malformed in any way.

        """
        if not is_listlike( details ) or len( details ) not in ( 6, 7 ):
            log.warning( f"Invoice {address} details malformed; expected 6 or 7 elements: {details!r}" )
            return None
        recipients, shares, total, description, is_paid, paid = details[:6]
        payer			= details[6] if len( details ) > 6 else None
        if not is_listlike( recipients ) or not is_listlike( shares ):
            log.warning( f"Invoice {address} recipients/shares are not sequences: {details!r}" )
            return None
        if not all( isinstance( s, int ) and not isinstance( s, bool ) and s >= 0 for s in shares ):
            log.warning( f"Invoice {address} shares are not all non-negative integers: {shares!r}" )
            return None
        try:
            shares		= tuple( shares )
            total_amount	= from_base_units( total, decimals=decimals )
            paid_amount		= from_base_units( paid, decimals=decimals )
        except ( InvalidAmountFormat, TypeError, ValueError ) as exc:
            log.warning( f"Invoice {address} details undecodable: {exc}" )
            return None
        return cls(
            address		= address,
            recipients		= tuple( recipients ),
            shares		= shares,
            total_amount	= total_amount,
            description		= str( description ),
            is_paid		= bool( is_paid ),
            paid_amount		= paid_amount,
            payer		= payer,
        )


def invoices_table( invoices: Sequence[InvoiceRecord], tablefmt=None ):
    """Render a sequence of InvoiceRecords for display."""
    return tabulate(
        list(
            (
                inv.address,
                inv.description,
                inv.total_amount,
                commas( f"{r} ({s}%)" for r,s in zip( inv.recipients, inv.shares )),
                'Paid' if inv.is_paid else 'Pending',
                inv.paid_amount,
            )
            for inv in invoices
        ),
        headers		= [ 'Invoice', 'Description', 'Amount', 'Recipients', 'Status', 'Paid' ],
        tablefmt	= tablefmt or INVOICE_FORMAT,
    )


class Invoice( Contract ):
    """One deployed Invoice contract."""
    def __init__( self, wallet: WalletProvider, address: str ):
        super().__init__( wallet, address, abi=invoice_abi )


class InvoiceAggregator:
    """Hydrates a sequence of Invoice contract addresses into InvoiceRecords.

    All the getInvoiceDetails() reads are issued concurrently, so a listing takes about as long as
    the slowest single read.  Any Invoice that cannot be read or decoded is left out of the result;
    one unreachable or malformed Invoice must not hide all the others.  The result retains the
    relative order of the supplied addresses, regardless of the order in which reads complete.

    """
    def __init__( self, wallet: WalletProvider, decimals: int = DECIMALS ):
        self._wallet		= wallet
        self._decimals		= decimals

    async def fetch( self, address: str ) -> Optional[InvoiceRecord]:
        """Read and decode one Invoice, or None if that fails for any reason."""
        try:
            details		= await Invoice( self._wallet, address ).getInvoiceDetails()
        except Exception as exc:
            log.warning( f"Failed to fetch details for Invoice at {address}: {exc}" )
            return None
        return InvoiceRecord.decode( address, details, decimals=self._decimals )

    async def _fetch_indexed( self, index: int, address: str ) -> Tuple[int, Optional[InvoiceRecord]]:
        return index, await self.fetch( address )

    async def hydrate( self, addresses: Sequence[str] ) -> List[InvoiceRecord]:
        beg			= timer()
        results			= await asyncio.gather( *(
            self._fetch_indexed( i, address )
            for i,address in enumerate( addresses )
        ))
        # Ordered by original index, never by completion
        records			= [
            record
            for _,record in sorted( results, key=lambda i_r: i_r[0] )
            if record is not None
        ]
        log.info( f"Hydrated {len( records )} of {len( addresses )} Invoices in {timer() - beg:.3f}s" )
        return records
