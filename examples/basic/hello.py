"""Parse and render in 3 lines: zero config, zero deps."""

from subrayado import parse, render

doc = parse("# Hello __World__\n_welcome_ back")
html = render(doc)
print(html)
