# mphkit

Building blocks for minimal perfect hash functions, in pure Python.

A minimal perfect hash function maps a fixed set of `m` keys onto the
integers `0 .. m-1` without collisions. `mphkit` provides:

- `mphkit.fch` builds such a function with the FCH algorithm (`Fch`).
  The result can be searched, dumped, loaded back, or packed into a
  flat byte string and searched from there with `fch_search_packed`.
- `mphkit.jenkins` provides the seeded Jenkins hash (`JenkinsState`,
  `jenkins_hash`, `jenkins_hash_vector`) these functions are built on.
- `mphkit.hashing` selects a hash function family (`HashFunction`), and
  creates, copies, dumps, loads and packs hash states. It also lists the
  construction algorithm names in the `Algorithm` enum.
- `mphkit.select` provides a select structure over a sorted sequence of
  integers (`Select`), with dump, load and queries on the packed form
  (`select_query_packed`, `select_next_query_packed`).
- `mphkit.graph` provides an undirected graph with a fixed edge budget
  (`Graph`), with cycle detection and 2-core ("critical node") discovery.
- `mphkit.bitbool` reads and writes single bits, 2-bit values and packed
  fixed-width values in byte and 32-bit word arrays.
- `mphkit.select_tables` holds per-byte rank and select tables
  (`rank_of_byte`, `select_in_byte`).
- `mphkit.miller_rabin` offers `check_primality`, a deterministic
  Miller-Rabin test for 32-bit numbers (multiples of 2, 3, 5 and 7,
  those primes included, are reported as not prime).
- `mphkit.containers` has a bounded FIFO queue (`VQueue`), a stack
  (`VStack`) and an insertion-ordered string map (`LinearStringMap`).

Keys may be `bytes`-like objects or `str`; strings are hashed as UTF-8.

## Installation

```
pip install .
```

Python 3.10 or later is required. The package has no dependencies of its own.

## Building and using an FCH function

```python
import random
from mphkit.fch import Fch, fch_search_packed

keys = [b"apple", b"banana", b"cherry", b"date", b"elderberry"]
mphf = Fch.build(keys, c=2.6, rng=random.Random(7))

positions = sorted(mphf.search(k) for k in keys)
assert positions == list(range(len(keys)))

# Serialise and load back.
restored = Fch.load(mphf.dump())
assert all(restored.search(k) == mphf.search(k) for k in keys)

# Pack into a flat byte string and search it directly.
packed = mphf.pack()
assert all(fch_search_packed(packed, k) == mphf.search(k) for k in keys)
```

A `c` value of 2 or less is replaced by 2.6. If no function is found
within the retry budget, `Fch.build` raises `FchBuildError`. Pass a
seeded `random.Random` as `rng` for reproducible builds, and a non-zero
`verbosity` to have progress messages written to standard error.

`Fch.packed_size()` counts a 4-byte algorithm tag in addition to the
bytes `Fch.pack()` returns, so it is 4 larger than `len(mphf.pack())`.

## Select queries

```python
from mphkit.select import Select, select_query_packed

sel = Select.generate([0, 1, 2, 3], 3)
assert sel.query(2) == 4          # the j-th set bit sits at j + keys[j]
packed = sel.pack()
assert select_query_packed(packed, 2) == sel.query(2)
assert Select.load(sel.dump()) == sel
```

## Graphs

```python
from mphkit.graph import Graph

g = Graph(5, 4)
for v1, v2 in [(0, 1), (1, 2), (2, 3), (3, 4)]:
    g.add_edge(v1, v2)
assert not g.is_cyclic()
assert sorted(g.neighbors(1)) == [0, 2]
```

`is_cyclic` peels vertices of degree one; edge slots that were never
filled are never peeled, so a graph holding fewer than its `nedges`
edges reports a cycle.

## What the package does not do

- There is no command-line tool: functions are built, checked and
  stored from Python code, and keys are passed as an iterable rather
  than read from a key file.
- Only the FCH construction is implemented. The other names in
  `Algorithm` are labels only; nothing in the package builds them.
- Jenkins is the only hash function family.