"""Request-scoped accessors for the collaborators built by ``create_app``."""

from fastapi import Request


def get_mailer(request: Request):
    return request.app.state.mailer


def get_payment_gateway(request: Request):
    return request.app.state.payment_gateway
