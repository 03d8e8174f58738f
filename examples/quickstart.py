# %% [markdown]
# # fuzzyrank: Quickstart
#
# **Type a few letters, find the file** - ranking candidates the way code
# editors' "go to file" boxes do.
#
# ---
#
# ## The Problem
#
# Users type short, lazy queries and expect the right thing at the top:
#
# ```
# "mr"    ->  "MeshRenderer.cpp"   (word beginnings)
# "fs"    ->  "Fuzzy Search"
# "tset"  ->  "test"               (one swapped pair)
# ```
#
# | Part | Topic |
# |------|-------|
# | 1 | Single matches and scores |
# | 2 | Ranking lists, limits and thresholds |
# | 3 | Records: key and keys |
# | 4 | Async ranking with cancellation |
# | 5 | Polars integration and FuzzyIndex |

# %%
import asyncio

import polars as pl

import fuzzyrank as fr

# %% [markdown]
# ---
# ## Part 1: Single matches
#
# Scores are never positive; 0 is an exact (case-insensitive) match. Matches
# that cannot be explained by word beginnings and consecutive runs are scaled
# down by a large factor, so they always rank below ones that can.

# %%
for target in ["Fuzzy Search", "MeshRenderer.cpp", "Monitor.cpp", "main.py"]:
    result = fr.single("mr" if "cpp" in target else "fs", target)
    print(f"{target:20s} -> {fr.highlight(result, '[', ']')!s:28s} {result.score if result else None}")

# %%
# One adjacent transposition is forgiven, at a small penalty
print(fr.single("tset", "test").score)  # -20
print(fr.single("tset", "test", allow_typo=False))  # None

# %% [markdown]
# ---
# ## Part 2: Ranking lists

# %%
files = [
    "src/render/MeshRenderer.cpp",
    "src/render/Material.cpp",
    "src/ui/Monitor.cpp",
    "src/main.py",
    "README.md",
    "tests/test_mesh_renderer.py",
]

results = fr.go("mr", files, limit=3)
for r in results:
    print(f"{r.score:>8}  {fr.highlight(r)}")
print(f"showing {len(results)} of {results.total} matches")

# %%
# Drop weak matches
print([r.target for r in fr.go("mr", files, threshold=-100)])

# %% [markdown]
# ---
# ## Part 3: Records
#
# `key` matches one property path per record; `keys` matches several and
# combines them with `score_fn` (best key by default).

# %%
people = [
    {"name": "Ada Lovelace", "team": {"name": "Analytical Engines"}},
    {"name": "Alan Turing", "team": {"name": "Bletchley"}},
    {"name": "Grace Hopper", "team": {"name": "Compilers"}},
]

for r in fr.go("al", people, key="name"):
    print(r.score, r.obj["name"])

for r in fr.go("ae", people, keys=["name", "team.name"]):
    print(r.score, [fr.highlight(k) for k in r])

# %% [markdown]
# ---
# ## Part 4: Async ranking
#
# `go_async` runs in small time slices on the event loop, so a UI can keep
# responding. Cancel a stale query when the user types another letter.

# %%
many_files = [f"pkg{i % 97}/Module{i}/ViewController{i}.swift" for i in range(200_000)]


async def main():
    stale = fr.go_async("v", many_files, limit=5)
    stale.cancel()
    try:
        await stale
    except fr.CanceledError:
        print("stale query canceled")

    results = await fr.go_async("vc42", many_files, limit=5)
    print([r.target for r in results])


asyncio.run(main())

# %% [markdown]
# ---
# ## Part 5: Polars
#
# The `.fuzzy` expression namespace is registered on import.

# %%
df = pl.DataFrame({"file": files})
print(
    df.with_columns(
        score=pl.col("file").fuzzy.score("mr"),
        marked=pl.col("file").fuzzy.highlight("mr", "[", "]"),
    ).filter(pl.col("file").fuzzy.is_match("mr"))
)

# %%
print(fr.rank_series(df["file"], "mr", limit=2))

# %%
# Prepare once, search many times
index = fr.FuzzyIndex.from_dataframe(df, "file")
print(index.search_series(pl.Series(["mr", "readme", "tmr"]), limit=1))
