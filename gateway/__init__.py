"""
Authentication gateway for the CueKeeper note-taking server.

The gateway is the only component between the public network and the
private document store. It terminates TLS (see :mod:`gateway.server`),
and for every incoming request it extracts the ``token`` query parameter,
hashes it, and looks up the resulting digest in the device registry (see
:mod:`gateway.services.devices`). Requests without a token are rejected with
400 (Bad Request); requests whose token does not match a registered device are
rejected with 401 (Unauthorized). Only requests from a known device reach the
application handler, which receives the device label and a handle to the
store.

Raw tokens are never stored or logged. The device file holds only SHA-256
digests, and the only token-derived value that appears in logs is the digest
of a rejected token.
"""
