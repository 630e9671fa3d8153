"""Free-threading safe: parse 1000 docs in parallel."""

from concurrent.futures import ThreadPoolExecutor

from subrayado import Markdown

md = Markdown()
docs = [f"# Doc {i}\n__Content__ for _document_ {i}" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(md, docs))

print(f"Rendered {len(results)} documents in parallel")
print("First:", results[0])
print("Last:", results[-1])
