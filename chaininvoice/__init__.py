
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

from __future__          import annotations

from .version		import __version__, __version_info__		# noqa F401
from .errors		import (		# noqa F401
    InvoiceError,
    NoWalletProvider, WalletRequestRejected, NotConnected,
    InvalidDraft, EmptyDraft, InvalidAmountFormat,
    ReadFailed, TransactionFailed,
)
from .units		import (		# noqa F401
    to_base_units, from_base_units, normalize,
)
from .wallet		import (		# noqa F401
    WalletProvider, Web3Wallet,
)
from .session		import (		# noqa F401
    ConnectionState, Session, Subscription, ChainSession,
)
from .invoice		import (		# noqa F401
    InvoiceDraft, InvoiceRecord, Invoice, InvoiceAggregator, invoices_table,
)
from .factory		import (		# noqa F401
    InvoiceFactory,
)
from .client		import (		# noqa F401
    InvoiceClient,
)

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"
