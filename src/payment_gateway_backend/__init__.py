# PUBLIC_INTERFACE
"""
Payment Gateway Backend package.

FastAPI service that creates Razorpay orders, verifies payment signatures and
encodes/decodes payloads with per-platform ciphers. The ASGI app lives in
``payment_gateway_backend.app``.
"""
