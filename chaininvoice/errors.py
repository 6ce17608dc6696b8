
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

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


class InvoiceError( Exception ):
    """Base of all failures the invoicing client reports to its caller.  The str() of any of these is
    suitable for display to the user.

    """
    pass


class NoWalletProvider( InvoiceError ):
    pass


class WalletRequestRejected( InvoiceError ):
    pass


class NotConnected( InvoiceError ):
    pass


class InvalidDraft( InvoiceError ):
    """The InvoiceDraft cannot be submitted; detected before any network call."""
    pass


class EmptyDraft( InvalidDraft ):
    pass


class InvalidAmountFormat( InvoiceError, ValueError ):
    pass


class ReadFailed( InvoiceError ):
    pass


class TransactionFailed( InvoiceError ):
    pass
