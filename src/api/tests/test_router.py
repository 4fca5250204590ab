"""Tests for MessageRouter registration and Dispatcher error mapping."""

import unittest
from unittest.mock import MagicMock
import sys
from pathlib import Path

from pymongo.errors import ServerSelectionTimeoutError

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from api.router import Dispatcher, INTERNAL_ERROR, MessageRouter
from api.routes import auth
from domain.model.errors import NotFoundError
from domain.model.message import RpcRequest


class TestMessageRouter(unittest.TestCase):
    def test_command_registers_handler(self):
        router = MessageRouter()

        @router.command('echo')
        async def echo(data, service):
            return data

        self.assertIs(router.get('echo'), echo)
        self.assertIsNone(router.get('missing'))

    def test_duplicate_command_rejected(self):
        router = MessageRouter()
        router.command('echo')(lambda data, service: None)

        with self.assertRaises(ValueError):
            router.command('echo')(lambda data, service: None)

    def test_include_router(self):
        router = MessageRouter()
        router.include_router(auth.router)

        self.assertEqual(
            router.commands,
            ['get-me', 'get-user', 'login-user', 'ping', 'register-user', 'update-user', 'verify-token'],
        )


class TestDispatcher(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.router = MessageRouter()
        self.service = MagicMock()
        self.dispatcher = Dispatcher(self.router, self.service)

    async def test_dispatch_passes_data_and_service(self):
        seen = {}

        @self.router.command('echo')
        async def echo(data, service):
            seen['service'] = service
            return {'echo': data}

        reply = await self.dispatcher.dispatch(RpcRequest(cmd='echo', data=[1, 2], id='r1'))

        self.assertEqual(reply.id, 'r1')
        self.assertEqual(reply.response, {'echo': [1, 2]})
        self.assertIs(seen['service'], self.service)

    async def test_unknown_command(self):
        reply = await self.dispatcher.dispatch(RpcRequest(cmd='delete-user', id='r1'))

        self.assertEqual(reply.err['code'], 'command-not-found')
        self.assertIn('delete-user', reply.err['message'])

    async def test_domain_error_is_returned_unchanged(self):
        @self.router.command('lookup')
        async def lookup(data, service):
            raise NotFoundError()

        reply = await self.dispatcher.dispatch(RpcRequest(cmd='lookup'))

        self.assertFalse(reply.ok)
        self.assertEqual(reply.err, {'code': 'user-not-found', 'message': 'User not found'})

    async def test_storage_error_becomes_internal_error(self):
        @self.router.command('lookup')
        async def lookup(data, service):
            raise ServerSelectionTimeoutError("no servers")

        with self.assertLogs('api.router', level='ERROR'):
            reply = await self.dispatcher.dispatch(RpcRequest(cmd='lookup'))

        self.assertEqual(reply.err, INTERNAL_ERROR)
        self.assertNotIn('no servers', reply.err['message'])


if __name__ == '__main__':
    unittest.main()
