"""Overlay the variants of a donor gVCF onto a base gVCF to produce a mutated gVCF.

We read the whole base gVCF into an IntervalMap and then go through the donor in file order
folding each record into the map:

  - Donor reference blocks are dropped, they carry no mutation
  - A donor record landing on a position the base does not cover is simply added
  - A donor record longer than the base record it lands on trims the reference blocks it runs
    into, and is dropped if it would run into any other record
  - A donor indel landing on a base indel is skipped. Getting the coordinates right is not
    something we can do safely, so we don't try
  - A base SNP is replaced by the donor record
  - A base reference block is split around a donor record with a single base REF (SNP or insertion)
  - Anything else is left alone and counted as 'unhandled_overlap'

The donor is deliberately not sorted: a later record may land on a piece created by splitting for
an earlier one.
"""
import time
from collections import Counter

from gvcfmut.lib.gvcfio import open_variant_file, sample_name, read_variants, write_mutated_gvcf
from gvcfmut.lib.intervalmap import IntervalMap, closed
from gvcfmut.lib.variant import ref_block

import logging

logger = logging.getLogger(__name__)


OUTCOMES = [
  ('inserted', 'Donor record added where the base had no coverage'),
  ('replaced', 'Base SNP replaced by the donor record'),
  ('split', 'Base reference block split around the donor record'),
  ('identical', 'Donor record identical to the base record, nothing to do'),
  ('skipped_ref_block', 'Donor reference block, dropped'),
  ('skipped_indel_overlap', 'Donor indel on top of a base indel, dropped'),
  ('unhandled_overlap', 'Donor record overlaps a base record in a way we do not resolve, dropped'),
  ('not_covered', 'Nothing covers the donor record start, so there is nothing to resolve it against'),
]


def main(base_fname, donor_fname, output_dir):
  """Overlay donor onto base and write out <sample>_mutated.g.vcf into output_dir

  :param base_fname:
  :param donor_fname:
  :param output_dir:
  :return: output file name, Counter of outcomes
  """
  stats = Counter()
  sample, variant_map = overlay(base_fname, donor_fname, stats=stats)
  return write_mutated_gvcf(output_dir, sample, variant_map), stats


def overlay(base_fname, donor_fname, stats=None):
  """

  :param base_fname: the gVCF being mutated. Must have exactly one sample
  :param donor_fname: gVCF to pull variants from
  :param stats: Counter. If given, donor record outcomes are tallied into it
  :return: sample name, IntervalMap
  """
  sample, variant_map = build_base_variant_map(base_fname)
  add_new_variants(donor_fname, variant_map, stats=stats)
  return sample, variant_map


def build_base_variant_map(base_fname):
  """Load every record of the base gVCF into an IntervalMap. The base is expected to be
  non-overlapping and to cover the genome, we don't check.

  :param base_fname:
  :return: sample name, IntervalMap
  """
  logger.debug('Loading base gVCF {}'.format(base_fname))
  t0 = time.time()
  variant_map = IntervalMap()
  vcf_in = open_variant_file(base_fname)
  try:
    sample = sample_name(vcf_in)
    for variant in read_variants(vcf_in, is_donor=False):
      variant_map.put(closed(variant.start, variant.end), variant)
  finally:
    vcf_in.close()
  t1 = time.time()
  logger.debug('Loaded {} records for sample {} in {:0.2f}s'.format(len(variant_map), sample, t1 - t0))
  return sample, variant_map


def add_new_variants(donor_fname, variant_map, stats=None):
  """Fold every record of the donor gVCF into variant_map, in file order

  :param donor_fname:
  :param variant_map: IntervalMap, modified in place
  :param stats: Counter
  :return: stats
  """
  stats = Counter() if stats is None else stats
  logger.debug('Adding variants from {}'.format(donor_fname))
  t0 = time.time()
  n = 0
  vcf_in = open_variant_file(donor_fname)
  try:
    for n, variant in enumerate(read_variants(vcf_in, is_donor=True), 1):
      add_donor_variant(variant_map, variant, stats)
  finally:
    vcf_in.close()
  t1 = time.time()

  logger.debug('Processed {} donor records in {:0.2f}s'.format(n, t1 - t0))
  logger.debug(', '.join('{}: {}'.format(k, stats[k]) for k, _ in OUTCOMES))
  if stats['unhandled_overlap']:
    logger.warning('{} donor records overlapped base records in ways that are not handled and were dropped'.format(
      stats['unhandled_overlap']))
  return stats


def add_donor_variant(variant_map, variant, stats=None):
  """Fold one donor variant into variant_map"""
  stats = Counter() if stats is None else stats
  if variant.is_ref_block:
    logger.debug('Skipping donor reference block {}'.format(variant))
    stats['skipped_ref_block'] += 1
    return

  overlapping = variant_map.get(variant.start)
  if overlapping is None:
    if place_variant(variant_map, variant):
      stats['inserted'] += 1
    else:
      stats['unhandled_overlap'] += 1
  elif overlapping.is_indel and variant.is_indel:
    # TODO: resolve indel on indel once we know how the coordinate shift should be carried
    logger.debug('Skipping donor indel {} overlapping base indel {}'.format(variant, overlapping))
    stats['skipped_indel_overlap'] += 1
  else:
    update_overlapping_variant(variant_map, variant, stats)


def update_overlapping_variant(variant_map, variant, stats=None):
  """Resolve a donor variant against the record covering its start position

  :param variant_map: IntervalMap, modified in place
  :param variant: the donor variant
  :param stats: Counter
  """
  stats = Counter() if stats is None else stats
  entry = variant_map.get_entry(variant.start)
  if entry is None:
    logger.debug('Nothing covers donor {}'.format(variant))
    stats['not_covered'] += 1
    return
  existing_range, existing = entry

  if existing == variant:
    stats['identical'] += 1
  elif existing.is_snp:
    if place_variant(variant_map, variant, replacing=existing_range):
      stats['replaced'] += 1
    else:
      stats['unhandled_overlap'] += 1
  elif existing.is_ref_block and len(variant.ref) == 1:
    variant_map.remove(existing_range)
    for sv in split_ref_block(existing, variant):
      variant_map.put(closed(sv.start, sv.end), sv)
    stats['split'] += 1
  else:
    logger.debug('Unhandled overlap: donor {} on base {}'.format(variant, existing))
    stats['unhandled_overlap'] += 1


def place_variant(variant_map, variant, replacing=None):
  """Store variant under its own span, dropping the entry at range `replacing` if given.

  Reference blocks the variant runs into are cut back to the bases it leaves free. If it runs into
  any other record the map is left as it was.

  :param variant_map: IntervalMap, modified in place
  :param variant: the donor variant
  :param replacing: ClosedRange of the entry the variant takes the place of
  :return: True if the variant was stored
  """
  rng = closed(variant.start, variant.end)
  others = [(r, x) for r, x in variant_map.overlapping(rng) if r != replacing]
  blocking = [x for _, x in others if not x.is_ref_block]
  if blocking:
    logger.debug('Unhandled overlap: donor {} runs into {}'.format(variant, ', '.join(str(x) for x in blocking)))
    return False

  if replacing is not None:
    variant_map.remove(replacing)
  for r, x in others:
    variant_map.remove(r)
    for piece in trim_ref_block(x, variant):
      variant_map.put(closed(piece.start, piece.end), piece)
  variant_map.put(rng, variant)
  return True


def trim_ref_block(block, variant):
  """The parts of a reference block that variant leaves uncovered, as new reference blocks"""
  pieces = []
  if block.start.pos < variant.start.pos:
    pieces.append(ref_block(block.start, variant.start.shifted(-1), block.ref))
  if block.end.pos > variant.end.pos:
    pieces.append(ref_block(variant.end.shifted(1), block.end, block.ref))
  return pieces


def split_ref_block(variant_to_split, variant_to_add):
  """Cut a reference block into up to three pieces: the part before variant_to_add,
  variant_to_add itself and the part after it. The pieces cover exactly the original block.

  :param variant_to_split: RefBlock
  :param variant_to_add: must lie fully inside variant_to_split
  :return: list of variants in position order
  """
  if not (variant_to_add.start.contig == variant_to_split.start.contig and
          variant_to_split.start.pos <= variant_to_add.start.pos and
          variant_to_add.end.pos <= variant_to_split.end.pos):
    raise ValueError('Variant to add {} must be fully contained within the variant to split {}'.format(
      variant_to_add, variant_to_split))

  split_variants = []
  if variant_to_add.start.pos > variant_to_split.start.pos:
    split_variants.append(
      ref_block(variant_to_split.start, variant_to_add.start.shifted(-1), variant_to_split.ref))
  split_variants.append(variant_to_add)
  if variant_to_add.end.pos < variant_to_split.end.pos:
    split_variants.append(
      ref_block(variant_to_add.end.shifted(1), variant_to_split.end, variant_to_split.ref))
  return split_variants
