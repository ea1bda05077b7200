# %% [markdown]
# # QuickSearch: The Complete Guide
#
# **Linking names without the cartesian product**
#
# ---
#
# ## The Problem
#
# You have two lists of people. Names are misspelled, titles come and go,
# and the lists are far too large to compare every pair.
#
# ```
# "Rep. Meg Muller"   vs  "Rep. Meg Mueller"
# "Towana Jacobs"     vs  "Twana Jacobs"
# "Micheal Johnson"   vs  "Michael Johnson"
# ```
#
# **QuickSearch** indexes the reference list by its tokens and only scores
# the names that share a token with each query.
#
# ---
#
# ## Table of Contents
#
# | Part | Topic | Description |
# |------|-------|-------------|
# | 1 | The Hook | Index once, search many times |
# | 2 | Selecting Results | Top-N and score thresholds |
# | 3 | Scorers | Built-in metrics and your own |
# | 4 | Batches | Many queries, one thread pool |
# | 5 | Polars | DataFrames in, DataFrames out |
# | 6 | Limits | What the token filter cannot find |

# %%
import time

import polars as pl

import quicksearch as qs

# %% [markdown]
# ---
# ## Part 1: The Hook
#
# Build the index once from (name, uid) pairs.

# %%
population = [
    ("Rep. Meg Mueller", 1),
    ("Twana Jacobs", 2),
    ("Michael Johnson", 3),
    ("Mike Johnson", 4),
    ("Elizabeth Taylor", 5),
    ("Liz Taylor", 6),
]
index = qs.build(population)
print(index)

for match in index.top_n(1, "jaro_winkler", "Rep. Meg Muller"):
    print(f"  [{match.score}%] {match.name} (uid={match.uid})")

# %% [markdown]
# ---
# ## Part 2: Selecting Results
#
# `top_n` keeps the N best matches; `within_threshold` keeps every match
# scoring at least the cutoff. Scores are integer percents, truncated:
# a similarity of 0.999 is 99, not 100.

# %%
print(index.top_n(2, "jaro_winkler", "Micheal Johnson"))
print(index.within_threshold(90, qs.Algorithm.DAMERAU_LEVENSHTEIN, "Towana Jacobs"))

# %% [markdown]
# ---
# ## Part 3: Scorers
#
# Any function `(str, str) -> float in [0, 1]` is a scorer.

# %%
for algorithm in qs.Algorithm:
    print(f"{algorithm.value:>20}: {qs.score('Elisabeth Taylor', 'Elizabeth Taylor', algorithm)}")


def initials_first(a, b):
    """Reward names that start with the same letter."""
    return 1.0 if a[:1].lower() == b[:1].lower() else 0.5


print(index.top_n(3, initials_first, "Liz Taylor"))

# %% [markdown]
# ---
# ## Part 4: Batches
#
# The index is read-only, so queries can run on a thread pool.

# %%
queries = [(name.replace("a", "e"), f"q{i}") for i, (name, _) in enumerate(population * 200)]

start = time.perf_counter()
results = qs.batch_top_n(index, 1, "jaro_winkler", queries, workers=4)
elapsed = time.perf_counter() - start
print(f"{len(results)} queries in {elapsed:.3f}s")
print(results[0])

# %% [markdown]
# ---
# ## Part 5: Polars

# %%
people = pl.DataFrame({"name": [n for n, _ in population], "id": [u for _, u in population]})
claims = pl.DataFrame(
    {"claimant": ["Towana Jacobs", "Mike Jonson", "Nobody"], "claim_id": ["c-1", "c-2", "c-3"]}
)
index = qs.QuickSearch.from_dataframe(people, "name", "id")
print(qs.match_dataframe(index, claims, "claimant", "claim_id", limit=2))

# %% [markdown]
# ---
# ## Part 6: Limits
#
# A name that shares no token with the query is never scored.
# "Smyth" will not find "Smith", even though the strings are close.

# %%
smiths = qs.build([("John Smith", 1)])
print(smiths.top_n(1, "jaro_winkler", "John Smyth"))  # found through "john"
print(smiths.top_n(1, "jaro_winkler", "Jon Smyth"))  # no shared token: []
