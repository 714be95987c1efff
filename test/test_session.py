import unittest

from fakes import FakeIdentityProvider
from mobile_client.errors import AuthFormError, IdentityError
from mobile_client.session import AuthSession


class AuthSessionTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.provider = FakeIdentityProvider()
        self.session = AuthSession(self.provider)
        self.events = []

        async def listener(principal):
            self.events.append(principal)

        self.remove_listener = self.session.add_listener(listener)

    async def test_starts_signed_out(self) -> None:
        self.assertFalse(self.session.is_authenticated)
        self.assertIsNone(await self.session.get_id_token())

    async def test_sign_up_then_sign_out_notifies_listeners(self) -> None:
        principal = await self.session.sign_up(" ana@example.com ", "secret1", "secret1")

        self.assertEqual(principal.email, "ana@example.com")
        self.assertIsNotNone(await self.session.get_id_token())

        await self.session.sign_out()

        self.assertEqual(self.events, [principal, None])
        self.assertIsNone(self.session.principal)
        self.assertEqual(self.provider.signed_out, [principal.uid])

    async def test_sign_out_when_signed_out_is_silent(self) -> None:
        await self.session.sign_out()

        self.assertEqual(self.events, [])

    async def test_removed_listener_is_not_called(self) -> None:
        self.remove_listener()
        self.provider.passwords["ana@example.com"] = "secret1"

        await self.session.sign_in("ana@example.com", "secret1")

        self.assertEqual(self.events, [])

    async def test_provider_rejection_keeps_session_empty(self) -> None:
        with self.assertRaises(IdentityError):
            await self.session.sign_in("ana@example.com", "wrong-password")

        self.assertIsNone(self.session.principal)
        self.assertEqual(self.events, [])

    async def test_login_form_validation(self) -> None:
        with self.assertRaisesRegex(AuthFormError, "Please enter both email and password"):
            await self.session.sign_in("  ", "secret1")

    async def test_registration_form_validation(self) -> None:
        cases = [
            (("", "secret1", "secret1"), "Please fill in all fields"),
            (("a@b.c", "123", "123"), "Password must be at least 6 characters"),
            (("a@b.c", "secret1", "secret2"), "Passwords do not match"),
        ]
        for args, message in cases:
            with self.subTest(message=message):
                with self.assertRaises(AuthFormError) as ctx:
                    await self.session.sign_up(*args)
                self.assertEqual(ctx.exception.message, message)

        self.assertEqual(self.provider.passwords, {})


if __name__ == "__main__":
    unittest.main()
