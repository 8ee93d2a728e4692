"""HTTP cross-cutting concerns: problem+json rendering and request ids."""
