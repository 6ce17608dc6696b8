import asyncio

import pytest

from .errors		import NoWalletProvider, WalletRequestRejected, ReadFailed
from .session		import ChainSession, ConnectionState, Session
from .wallet_test	import FakeWallet


@pytest.mark.asyncio
async def test_session_no_provider():
    chain			= ChainSession( None )
    with pytest.raises( NoWalletProvider ):
        await chain.initialize()
    with pytest.raises( NoWalletProvider ):
        await chain.connect()
    assert chain.session == Session()
    chain.dispose()


@pytest.mark.asyncio
async def test_session_initialize_dispose():
    wallet			= FakeWallet( chain_id=1291 )
    chain			= ChainSession( wallet )
    subscription		= await chain.initialize()
    assert chain.session.chain_id == 1291
    assert chain.session.state is ConnectionState.Disconnected
    assert len( wallet._listeners ) == 1

    # Re-initializing doesn't leak another subscription
    assert await chain.initialize() is subscription
    assert len( wallet._listeners ) == 1

    chain.dispose()
    assert subscription.closed
    assert not wallet._listeners
    wallet.switch_chain( 5 )
    assert chain.session.chain_id == 1291, \
        "A disposed session should no longer observe chain changes"

    async with ChainSession( wallet ) as scoped:
        assert scoped.session.chain_id == 5
        assert len( wallet._listeners ) == 1
    assert not wallet._listeners


@pytest.mark.asyncio
async def test_session_initialize_failure():
    class BrokenWallet( FakeWallet ):
        async def chain_id( self ):
            raise ConnectionError( "node unreachable" )

    wallet			= BrokenWallet()
    chain			= ChainSession( wallet )
    with pytest.raises( ReadFailed ):
        await chain.initialize()
    assert not chain.initialized
    assert not wallet._listeners


@pytest.mark.asyncio
async def test_session_connect():
    wallet			= FakeWallet( accounts=( '0xA1', '0xA2' ))
    chain			= ChainSession( wallet )
    await chain.initialize()
    assert await chain.connect() == '0xA1'
    assert chain.session == Session( wallet_address='0xA1', chain_id=1291, state=ConnectionState.Connected )
    assert chain.session.connected

    chain.disconnect()
    assert chain.session == Session( chain_id=1291 )
    assert not chain.session.connected


@pytest.mark.asyncio
async def test_session_connecting():
    """While awaiting the user's authorization, the session is Connecting."""
    wallet			= FakeWallet()
    wallet.gate			= asyncio.Event()
    chain			= ChainSession( wallet )
    connecting			= asyncio.create_task( chain.connect() )
    await asyncio.sleep( 0 )
    assert chain.session.state is ConnectionState.Connecting
    wallet.gate.set()
    assert await connecting == '0xA1'
    assert chain.session.state is ConnectionState.Connected


@pytest.mark.asyncio
async def test_session_connect_rejected():
    wallet			= FakeWallet()
    wallet.reject		= RuntimeError( "User rejected the request." )
    chain			= ChainSession( wallet )
    await chain.initialize()
    with pytest.raises( WalletRequestRejected ) as excinfo:
        await chain.connect()
    assert "User rejected" in str( excinfo.value )
    assert isinstance( excinfo.value.__cause__, RuntimeError )
    assert chain.session.state is ConnectionState.Disconnected
    assert chain.session.wallet_address is None

    wallet.reject		= None
    wallet.accounts		= []
    with pytest.raises( WalletRequestRejected ):
        await chain.connect()
    assert chain.session.state is ConnectionState.Disconnected


@pytest.mark.asyncio
async def test_session_chain_changed():
    """A network change alters only the chain ID; never the account or connection state."""
    wallet			= FakeWallet( chain_id=1291 )
    chain			= ChainSession( wallet )
    await chain.initialize()
    await chain.connect()
    before			= chain.session

    wallet.switch_chain( 1 )
    assert chain.session.chain_id == 1
    assert chain.session.wallet_address == before.wallet_address
    assert chain.session.state is before.state

    # EIP-1193 wallets report chain IDs in hex
    chain._chain_changed( '0x50b' )
    assert chain.session.chain_id == 1291

    wallet.chain		= 5
    assert await chain.get_chain_id() == 5
    assert chain.session.chain_id == 5
    assert chain.session.wallet_address == '0xA1'


@pytest.mark.asyncio
async def test_session_chain_changed_during_read():
    """A chain change signalled while the chain ID query is in flight is newer than its result."""
    class SlowChainWallet( FakeWallet ):
        async def chain_id( self ):
            chain_id		= self.chain
            await asyncio.sleep( .05 )
            return chain_id

    wallet			= SlowChainWallet( chain_id=1 )
    chain			= ChainSession( wallet )
    initializing		= asyncio.create_task( chain.initialize() )
    await asyncio.sleep( .01 )
    wallet.switch_chain( 1291 )
    await initializing
    assert chain.session.chain_id == 1291

    # Absent any signalled change, a subsequent query is applied
    wallet.chain		= 5
    assert await chain.get_chain_id() == 5
    assert chain.session.chain_id == 5

    reading			= asyncio.create_task( chain.get_chain_id() )
    await asyncio.sleep( .01 )
    wallet.switch_chain( 7 )
    assert await reading == 7
    assert chain.session.chain_id == 7
