"""
Unit tests for API key management and the one-time admin key retrieval.
"""
import unittest

from ttstt.errors import AlreadyRetrieved, CannotRevokeAdminKey
from ttstt.models import ApiKeyRole
from ttstt.services import keys_service
from ttstt.state import TtsttState


class TestKeyManagement(unittest.TestCase):
    """Test cases for generate/revoke/list/get_admin_key."""

    def setUp(self):
        self.state = TtsttState()
        keys_service.ensure_admin_key(self.state)

    def test_initial_admin_key_created_once(self):
        first = self.state.admin_key
        self.assertTrue(first.startswith("ttstt-admin-"))
        self.assertFalse(keys_service.ensure_admin_key(self.state))
        self.assertEqual(self.state.admin_key, first)
        self.assertEqual(len(self.state.api_keys), 1)
        self.assertEqual(self.state.api_keys[0].name, "Initial Admin Key")

    def test_generate_key_prefixes(self):
        admin = keys_service.generate_api_key(self.state, "ops", ApiKeyRole.ADMIN)
        req = keys_service.generate_api_key(self.state, "client", ApiKeyRole.REQUESTOR)
        self.assertTrue(admin.key.startswith("ttstt-admin-"))
        self.assertTrue(req.key.startswith("ttstt-req-"))
        self.assertEqual(req.name, "client")
        self.assertEqual(len(self.state.api_keys), 3)

    def test_get_admin_key_while_single_admin(self):
        res = keys_service.get_admin_key(self.state)
        self.assertEqual(res.admin_key, self.state.admin_key)
        # a requestor key does not count
        keys_service.generate_api_key(self.state, "client", ApiKeyRole.REQUESTOR)
        self.assertEqual(keys_service.get_admin_key(self.state).admin_key, self.state.admin_key)

    def test_get_admin_key_after_second_admin(self):
        keys_service.get_admin_key(self.state)
        keys_service.generate_api_key(self.state, "ops", ApiKeyRole.ADMIN)
        for _ in range(3):
            with self.assertRaises(AlreadyRetrieved):
                keys_service.get_admin_key(self.state)

    def test_revoke_initial_admin_key_refused(self):
        with self.assertRaises(CannotRevokeAdminKey):
            keys_service.revoke_api_key(self.state, self.state.admin_key)
        self.assertEqual(len(self.state.api_keys), 1)

    def test_revoke_generated_key(self):
        req = keys_service.generate_api_key(self.state, "client", ApiKeyRole.REQUESTOR)
        keys_service.revoke_api_key(self.state, req.key)
        self.assertEqual([k.key for k in self.state.api_keys], [self.state.admin_key])
        # revoking again is a no-op
        keys_service.revoke_api_key(self.state, req.key)
        self.assertEqual(len(self.state.api_keys), 1)

    def test_list_hides_keys(self):
        keys_service.generate_api_key(self.state, "client", ApiKeyRole.REQUESTOR)
        infos = keys_service.list_api_keys(self.state)
        self.assertEqual(len(infos), 2)
        for info, key in zip(infos, self.state.api_keys):
            self.assertEqual(info.key_preview, key.key[:20] + "...")
            self.assertNotIn("key", info.model_dump())


if __name__ == "__main__":
    unittest.main()
