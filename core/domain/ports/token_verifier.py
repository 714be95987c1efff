from abc import ABC, abstractmethod


class TokenVerifier(ABC):
    @abstractmethod
    def verify(self, token: str) -> str:
        """
        Verifies a bearer credential.

        Returns:
            str: the subject identifier, used as the owner of every task
            touched by the request.

        Raises:
            AuthenticationError: for any malformed, expired or forged token.
        """
        raise NotImplementedError
