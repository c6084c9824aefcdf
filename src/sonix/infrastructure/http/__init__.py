from sonix.infrastructure.http.requests_transport import RequestsTransport, random_user_agent

__all__ = ["RequestsTransport", "random_user_agent"]
