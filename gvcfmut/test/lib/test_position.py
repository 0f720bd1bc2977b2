import pytest

from gvcfmut.lib.position import GenomicPosition as P, compare_contigs, contig_key


def test_same_contig_order():
  """Position: same contig compares by offset"""
  assert P('chr1', 5) < P('chr1', 10)
  assert P('chr1', 10) > P('chr1', 5)
  assert P('chr1', 10) == P('chr1', 10)
  assert P('chr1', 10) <= P('chr1', 10)


def test_numeric_contig_order():
  """Position: chr prefix is stripped and contigs compared as numbers"""
  assert P('chr2', 500) < P('chr10', 1)
  assert P('Chr2', 1) < P('chr10', 1)
  assert P('2', 1) < P('chr10', 1)
  assert sorted(['chr10', 'chr1', 'chr2'], key=contig_key) == ['chr1', 'chr2', 'chr10']


def test_non_numeric_contig_order():
  """Position: non-numeric contigs fall back to comparing names"""
  assert P('chr1', 1) < P('chrX', 1)
  assert P('scaffold_2', 1) > P('scaffold_10', 1)  # Lexicographic, not numeric
  assert compare_contigs('chrX', 'chrX') == 0


def test_numeric_tie_uses_name():
  """Position: contigs with the same number but different names are not equal"""
  assert compare_contigs('chr1', '1') != 0
  assert P('chr1', 1) != P('1', 1)


def test_position_basics():
  """Position: 1-based, hashable, shifting"""
  with pytest.raises(ValueError):
    P('chr1', 0)
  assert P('chr1', 10).shifted(-1) == P('chr1', 9)
  assert len({P('chr1', 1), P('chr1', 1), P('chr1', 2)}) == 2
  assert str(P('chr1', 7)) == 'chr1:7'
