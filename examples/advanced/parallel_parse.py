"""Share one engine across threads; each parse is independent."""

from concurrent.futures import ThreadPoolExecutor

from markymark import MarkyMark

mm = MarkyMark()
docs = ["# Doc " + str(i) + "\n\nContent for document " + str(i) for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(mm.parse_markdown, docs))

print(f"Parsed {len(results)} documents in parallel")
print("First doc items:", len(results[0]))
