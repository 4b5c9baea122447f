"""
Source resolution for image derivatives.

SourceResolver decides, per request, which image to render from, whether
the decode fits into the memory budget and where the derivative is cached.
ResolverManager wires it from configuration.
"""
