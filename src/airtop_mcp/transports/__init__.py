"""
Transport bindings for the gateway.

  - stdio: one client over stdin/stdout (``transports.stdio``)
  - SSE: many clients over HTTP (``transports.sse``)

The bindings are mutually exclusive and chosen at startup.
"""
