"""Tests for RPC request/reply envelopes."""

import unittest

from domain.model.message import RpcReply, RpcRequest


class TestRpcRequest(unittest.TestCase):
    def test_from_dict(self):
        request = RpcRequest.from_dict({'id': 7, 'cmd': 'get-user', 'data': {'id': 'u1'}, 'reply_to': 'r'})

        self.assertEqual(request.id, '7')
        self.assertEqual(request.cmd, 'get-user')
        self.assertEqual(request.data, {'id': 'u1'})
        self.assertEqual(request.reply_to, 'r')

    def test_from_dict_rejects_invalid(self):
        for raw in ({'id': 'r1'}, {'cmd': 'ping'}, {'id': 'r1', 'cmd': ''}, ['ping'], 'ping'):
            with self.subTest(raw=raw):
                self.assertIsNone(RpcRequest.from_dict(raw))

    def test_default_id(self):
        self.assertNotEqual(RpcRequest(cmd='ping').id, RpcRequest(cmd='ping').id)


class TestRpcReply(unittest.TestCase):
    def test_success_envelope(self):
        reply = RpcReply(id='r1', response={'status': 'ok'})

        self.assertTrue(reply.ok)
        self.assertEqual(reply.to_dict(), {'id': 'r1', 'response': {'status': 'ok'}})

    def test_error_envelope(self):
        reply = RpcReply(id='r1', err={'code': 'missing-token', 'message': 'Missing token'})

        self.assertFalse(reply.ok)
        self.assertNotIn('response', reply.to_dict())
        self.assertEqual(RpcReply.from_dict(reply.to_dict()).err['code'], 'missing-token')


if __name__ == '__main__':
    unittest.main()
