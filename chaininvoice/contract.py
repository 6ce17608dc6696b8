
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

from typing		import Dict, List, Optional

from .util		import commas
from .wallet		import WalletProvider

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'contract' )


#
# The InvoiceFactory mints one Invoice contract per invoice, and remembers which were created by
# (or for) each user.
#
invoice_factory_abi		= [
    {
        "inputs": [
            {"internalType": "address[]", "name": "_recipients",  "type": "address[]"},
            {"internalType": "uint256[]", "name": "_shares",      "type": "uint256[]"},
            {"internalType": "uint256",   "name": "_totalAmount", "type": "uint256"},
            {"internalType": "string",    "name": "_description", "type": "string"},
        ],
        "name": "createInvoice",
        "outputs": [
            {"internalType": "address",   "name": "",             "type": "address"},
        ],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address",   "name": "_user",        "type": "address"},
        ],
        "name": "getUserInvoices",
        "outputs": [
            {"internalType": "address[]", "name": "",             "type": "address[]"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

invoice_abi			= [
    {
        "inputs": [],
        "name": "getInvoiceDetails",
        "outputs": [
            {"internalType": "address[]", "name": "",             "type": "address[]"},
            {"internalType": "uint256[]", "name": "",             "type": "uint256[]"},
            {"internalType": "uint256",   "name": "",             "type": "uint256"},
            {"internalType": "string",    "name": "",             "type": "string"},
            {"internalType": "bool",      "name": "",             "type": "bool"},
            {"internalType": "uint256",   "name": "",             "type": "uint256"},
            {"internalType": "address",   "name": "",             "type": "address"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]


class Contract:
    """Interact with a deployed Ethereum contract at a known address, via a WalletProvider.

    Does not clutter up the object() API with names, to avoid shadowing any normal Contract API
    functions starting with letters.  Any unknown attribute .name is assumed to be a free (view)
    call to a Contract API function; transactions must be made via ._send( name, ... ).

    """
    def __init__(
        self,
        wallet: WalletProvider,
        address: str,
        abi: Optional[List[Dict]]	= None,
        name: Optional[str]		= None,
    ):
        assert address, \
            f"A deployed {name or self.__class__.__name__} Contract address is required"
        self._wallet		= wallet
        self._address		= address
        self._abi		= abi
        self._name		= name or self.__class__.__name__

    async def _call( self, name, *args ):
        """Invoke a free function name on the deployed contract w/ the supplied positional args."""
        log.info( f"Calling {self._name}.{name}( {commas( args )} ) at {self._address}" )
        try:
            result		= await self._wallet.call( self._address, self._abi, name, *args )
            success		= True
        except Exception as exc:
            result		= repr( exc )
            success		= False
            raise
        finally:
            log.info( f"Called  {self._name}.{name}( {commas( args )} ) -{'-' if success else 'x'}> {result}" )
        return result

    async def _send( self, name, *args, sender=None ):
        """Transact w/ function name on the deployed contract from the sender account, returning the
        transaction receipt.

        """
        log.info( f"Sending {self._name}.{name}( {commas( args )} ) from {sender}" )
        try:
            receipt		= await self._wallet.send( self._address, self._abi, name, *args, sender=sender )
            success		= True
        except Exception as exc:
            receipt		= repr( exc )
            success		= False
            raise
        finally:
            log.info( f"Sent    {self._name}.{name}( {commas( args )} ) -{'-' if success else 'x'}> {receipt}" )
        return receipt

    def __getattr__( self, name ):
        """All positional args are passed to the Contract API function; returns an awaitable."""
        if name.startswith( '_' ):
            raise AttributeError( name )

        def curry( *args ):
            return self._call( name, *args )
        return curry
