import logging

import pytest

from .client		import InvoiceClient
from .invoice		import InvoiceDraft, InvoiceRecord
from .session		import ConnectionState
from .wallet_test	import FakeWallet
from .invoice_test	import details


def rent():
    return InvoiceDraft(
        recipients	= [ '0xB', '0xC' ],
        shares		= [ 60, 40 ],
        total_amount	= "10.5",
        description	= "rent",
    )


def wallet_with_invoices():
    return FakeWallet(
        accounts	= ( '0xA1', ),
        invoices	= { '0xA1': [ 'addr1', 'addr2' ] },
        details		= {
            'addr1':	details( description="first" ),
            'addr2':	ConnectionError( "execution reverted" ),
        },
    )


@pytest.mark.asyncio
async def test_client_connect_and_load():
    """An unreadable Invoice is simply left out of the listing."""
    wallet			= wallet_with_invoices()
    async with InvoiceClient( wallet, expected_chain_id=1291 ) as client:
        assert await client.connect_and_load() == '0xA1'
        assert client.error == ''
        assert client.loading is False
        assert client.account == '0xA1'
        assert client.session.state is ConnectionState.Connected
        assert client.invoices == [ InvoiceRecord.decode( 'addr1', details( description="first" )) ]
        assert client.network_warning is None
        assert wallet._listeners
    assert not wallet._listeners


@pytest.mark.asyncio
async def test_client_submit_invoice():
    wallet			= wallet_with_invoices()
    client			= InvoiceClient( wallet, expected_chain_id=1291 )
    await client.connect_and_load()
    assert len( client.invoices ) == 1

    receipt			= await client.submit_invoice( rent() )
    assert receipt is not None, client.error
    assert wallet.sent == [(
        client.factory._address, 'createInvoice',
        ( [ '0xB', '0xC' ], [ 60, 40 ], 10500000000000000000, "rent" ),
        '0xA1',
    )]
    assert client.tx_hash.startswith( '0x' ) and len( client.tx_hash ) == 66
    assert client.error == ''

    # The refreshed listing includes the new Invoice, w/ its amount in human units
    assert [ r.address for r in client.invoices ] == [ 'addr1', '0xC1' ]
    assert client.invoices[-1].total_amount == "10.5"
    assert client.invoices[-1].shares == ( 60, 40 )
    assert wallet.calls[-4:] == [
        ( client.factory._address, 'getUserInvoices', ( '0xA1', )),
        ( 'addr1', 'getInvoiceDetails', ()),
        ( 'addr2', 'getInvoiceDetails', ()),
        ( '0xC1', 'getInvoiceDetails', ()),
    ]


@pytest.mark.asyncio
async def test_client_edited_draft():
    """Submitting the client's own draft clears it once the invoice is created."""
    client			= InvoiceClient( FakeWallet(), expected_chain_id=1291 )
    await client.connect_and_load()
    client.draft.add_recipient( '0xB', "100" )
    client.draft.total_amount	= "1"
    client.draft.description	= "consulting"
    assert await client.submit_invoice()
    assert client.draft == InvoiceDraft()
    assert [ r.description for r in client.invoices ] == [ "consulting" ]


@pytest.mark.asyncio
@pytest.mark.parametrize( "recipients, shares", [
    ( [], [] ),
    ( [], [ 100 ] ),
    ( [ '0xB', '0xC' ], [ 100 ] ),
    ( [ '0xB' ], [ 60, 40 ] ),
])
async def test_client_empty_draft( recipients, shares ):
    """A draft w/o recipients, or w/ mismatched shares, fails before any network access."""
    wallet			= FakeWallet()
    client			= InvoiceClient( wallet )
    draft			= InvoiceDraft( recipients=recipients, shares=shares, total_amount="1", description="x" )
    assert await client.submit_invoice( draft ) is None
    assert client.error
    assert client.loading is False
    assert wallet.calls == []


@pytest.mark.asyncio
async def test_client_invalid_draft():
    wallet			= FakeWallet()
    client			= InvoiceClient( wallet, shares_total=100 )
    await client.connect_and_load()
    calls			= len( wallet.calls )

    draft			= rent()
    draft.shares		= [ 60, 30 ]
    assert await client.submit_invoice( draft ) is None
    assert "must total 100" in client.error

    draft			= rent()
    draft.total_amount		= "10.5.1"
    assert await client.submit_invoice( draft ) is None
    assert "10.5.1" in client.error

    draft			= rent()
    draft.recipients		= [ '0xB', '' ]
    assert await client.submit_invoice( draft ) is None
    assert "address" in client.error
    assert len( wallet.calls ) == calls

    # Without shares_total, the share sum is left to the contract
    draft			= rent()
    draft.shares		= [ 60, 30 ]
    lenient			= InvoiceClient( wallet )
    await lenient.connect_and_load()
    assert await lenient.submit_invoice( draft ) is not None
    assert lenient.error == ''


@pytest.mark.asyncio
async def test_client_no_wallet():
    client			= InvoiceClient( None )
    assert await client.connect_and_load() is None
    assert "wallet" in client.error.lower()
    assert await client.refresh_invoices() is None
    assert await client.submit_invoice( rent() ) is None
    assert client.loading is False
    client.close()


@pytest.mark.asyncio
async def test_client_failures_retain_invoices():
    wallet			= wallet_with_invoices()
    client			= InvoiceClient( wallet )
    wallet.reject		= RuntimeError( "User rejected the request." )
    assert await client.connect_and_load() is None
    assert "User rejected" in client.error
    assert client.invoices == []

    # A refresh before connecting fails; then, a successful connect clears the error
    assert await client.refresh_invoices() is None
    assert client.error
    wallet.reject		= None
    assert await client.connect_and_load() == '0xA1'
    assert client.error == ''
    loaded			= list( client.invoices )
    assert loaded

    wallet.invoices['0xA1']	= ConnectionError( "node unreachable" )
    assert await client.refresh_invoices() is None
    assert "node unreachable" in client.error
    assert client.invoices == loaded
    assert client.loading is False

    wallet.send_error		= RuntimeError( "insufficient funds for gas" )
    assert await client.submit_invoice( rent() ) is None
    assert "insufficient funds" in client.error
    assert client.invoices == loaded
    assert client.tx_hash == ''


@pytest.mark.asyncio
async def test_client_network_warning():
    """The wrong network is a degraded state, not a failure."""
    wallet			= wallet_with_invoices()
    wallet.chain		= 1
    client			= InvoiceClient( wallet, expected_chain_id=1291 )
    assert client.network_warning is None
    assert await client.connect_and_load() == '0xA1'
    assert "1291" in client.network_warning
    assert client.error == ''

    wallet.switch_chain( 1291 )
    assert client.network_warning is None
    assert client.account == '0xA1'

    wallet.switch_chain( '0x5' )
    assert client.session.chain_id == 5
    assert client.network_warning
    assert client.session.state is ConnectionState.Connected


@pytest.mark.asyncio
async def test_client_environment( monkeypatch ):
    monkeypatch.setenv( 'INVOICE_FACTORY_ADDRESS', '0xF00' )
    monkeypatch.setenv( 'INVOICE_CHAIN_ID', '0x5' )
    wallet			= FakeWallet( chain_id=5 )
    client			= InvoiceClient( wallet )
    assert client.expected_chain_id == 5
    await client.connect_and_load()
    assert client.network_warning is None
    assert ( '0xF00', 'getUserInvoices', ( '0xA1', )) in wallet.calls

    assert InvoiceClient( wallet, factory_address='0xF01', expected_chain_id=7 ).expected_chain_id == 7


class HashlessWallet( FakeWallet ):
    """A wallet whose transaction results lack a transaction hash (or aren't receipts at all)."""
    receipt			= 'missing'

    async def send( self, address, abi, function, *args, sender=None ):
        receipt			= await super().send( address, abi, function, *args, sender=sender )
        if self.receipt == 'missing':
            receipt.pop( 'transactionHash' )
            return receipt
        return self.receipt


@pytest.mark.asyncio
@pytest.mark.parametrize( "receipt", [ 'missing', None, b'\x12' * 32 ] )
async def test_client_submit_without_receipt( receipt ):
    wallet			= HashlessWallet()
    wallet.receipt		= receipt
    client			= InvoiceClient( wallet, expected_chain_id=1291 )
    await client.connect_and_load()
    assert await client.submit_invoice( rent() ) is None
    assert "no transaction receipt" in client.error
    assert client.tx_hash == ''
    assert client.loading is False


@pytest.mark.asyncio
async def test_client_submit_logging( caplog ):
    """A successful submission is reported at INFO; only failures warrant a WARNING."""
    client			= InvoiceClient( FakeWallet(), expected_chain_id=1291 )
    await client.connect_and_load()
    with caplog.at_level( logging.INFO, logger='client' ):
        assert await client.submit_invoice( rent() ) is not None
    created			= [ r for r in caplog.records if r.name == 'client' and "Created invoice" in r.getMessage() ]
    assert len( created ) == 1
    assert created[0].levelno == logging.INFO
    assert not [ r for r in caplog.records if r.name == 'client' and r.levelno >= logging.WARNING ]
