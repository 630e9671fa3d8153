"""AST serialization: cache a parsed document as JSON."""

from subrayado import from_json, parse, render, to_json

doc = parse("# Cached __document__\nwith _spans_")
payload = to_json(doc, indent=2)
print(payload)

restored = from_json(payload)
assert restored == doc
print(render(restored))
