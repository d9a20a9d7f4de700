"""simpledi -- scaffolding for simple-di / Hono / drizzle TypeScript backends.

Generates entity modules, use cases and CRUD sets, and wires them into a
project's aggregator files (core module, use-case module, route table,
schema index) by patching those files in place.
"""

__version__ = "0.3.0"
