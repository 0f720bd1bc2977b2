"""Reading and writing of gVCF files with pysam.

Records read from a gVCF are converted to the simple RefBlock/CalledVariant records the overlay
works with. Writing goes the other way, from the variant map to a single sample gVCF.
"""
import logging
import os
import time

import pysam

from gvcfmut.lib.error import ConfigurationError, MalformedRecordError
from gvcfmut.lib.position import GenomicPosition
from gvcfmut.lib.variant import ASM_FIELDS, NON_REF, make_variant

logger = logging.getLogger(__name__)


# (ID, Number, Type, Description)
FORMAT_LINES = [
  ('AD', 3, 'Integer', 'Allelic depths for the ref and alt alleles in the order listed'),
  ('DP', 1, 'Integer', 'Read Depth (only filtered reads used for calling)'),
  ('GQ', 1, 'Integer', 'Genotype Quality'),
  ('GT', 1, 'String', 'Genotype'),
  ('PL', 'G', 'Integer', 'Normalized, Phred-scaled likelihoods for genotypes as defined in the VCF specification'),
]

INFO_LINES = [
  ('DP', 1, 'Integer', 'Total Depth'),
  ('NS', 1, 'Integer', 'Number of Samples With Data'),
  ('AF', 3, 'Integer', 'Allele Frequency'),
  ('END', 1, 'Integer', 'Stop position of the interval'),
  # Only written out for records that came in carrying them
  ('ASM_Chr', 1, 'String', 'Assembly chromosome'),
  ('ASM_Start', 1, 'Integer', 'Assembly start position'),
  ('ASM_End', 1, 'Integer', 'Assembly end position'),
  ('ASM_Strand', 1, 'String', 'Assembly strand'),
]


def open_variant_file(fname):
  if not os.path.exists(fname):
    raise FileNotFoundError('No such variant file: {}'.format(fname))
  mode = 'rb' if fname.endswith('bcf') else 'r'
  return pysam.VariantFile(fname, mode)


def sample_name(vcf_in):
  """The one sample declared in this file's header

  :param vcf_in: pysam.VariantFile
  :return: sample name
  """
  samples = list(vcf_in.header.samples)
  if len(samples) == 0:
    raise ConfigurationError('No sample declared in {}'.format(vcf_in.filename))
  if len(samples) > 1:
    raise ConfigurationError(
      'Expected a single sample in {}, found {}: {}'.format(vcf_in.filename, len(samples), ', '.join(samples)))
  return samples[0]


def to_variant(v, is_donor=False):
  """Convert a pysam.VariantRecord into a RefBlock or CalledVariant

  :param v: the record
  :param is_donor: donor records only keep their first ALT, base records keep them all
  :return:
  """
  if not v.alts:
    raise MalformedRecordError('Record without ALT allele at {}:{}'.format(v.chrom, v.pos))
  alt = v.alts[0] if is_donor else ','.join(v.alts)
  asm = tuple((k, v.info[k]) for k in ASM_FIELDS if k in v.info)
  # pysam's stop is 0-based half open, which is the same number as the 1-based inclusive end
  return make_variant(
    GenomicPosition(v.chrom, v.pos), GenomicPosition(v.chrom, v.stop),
    v.ref, alt, is_donor=is_donor, asm=asm)


def read_variants(vcf_in, is_donor=False):
  """Generator over the records of an open pysam.VariantFile as variants, in file order"""
  for v in vcf_in:
    yield to_variant(v, is_donor=is_donor)


def generic_header(sample, contigs=()):
  hdr = pysam.VariantHeader()
  for line in FORMAT_LINES:
    hdr.formats.add(*line)
  for line in INFO_LINES:
    hdr.info.add(*line)
  for contig in contigs:
    hdr.contigs.add(contig)
  hdr.add_sample(sample)
  return hdr


def mutated_gvcf_fname(output_dir, sample):
  return os.path.join(output_dir, '{}_mutated.g.vcf'.format(sample))


def genotype(variant):
  """Reference blocks are written 0/0, everything else as homozygous ALT"""
  return (0, 0) if variant.alt == NON_REF else (1, 1)


def write_mutated_gvcf(output_dir, sample, variant_map):
  """Write out the variant map as a single sample gVCF

  :param output_dir: created if it does not exist
  :param sample: sample name
  :param variant_map: IntervalMap of variants
  :return: path of the file written
  """
  if not os.path.exists(output_dir):
    os.makedirs(output_dir)
  fname = mutated_gvcf_fname(output_dir, sample)

  logger.debug('Writing {}'.format(fname))
  t0 = time.time()
  cnt = 0
  with pysam.VariantFile(fname, 'w', header=generic_header(sample, variant_map.contigs())) as vcf_out:
    for _, variant in variant_map.entries():
      vcf_out.write(to_record(vcf_out, sample, variant))
      cnt += 1
  t1 = time.time()
  logger.debug('Wrote {} records in {:0.2f}s'.format(cnt, t1 - t0))
  return fname


def to_record(vcf_out, sample, variant):
  # pysam keeps INFO/END in step with stop: it is written for reference blocks and for any record whose
  # span differs from its REF, and left out where it is implied
  rec = vcf_out.new_record(
    contig=variant.contig,
    start=variant.start.pos - 1,
    stop=variant.end.pos,
    alleles=(variant.ref,) + tuple(variant.alt.split(',')))
  for k, val in variant.asm:
    rec.info[k] = val
  rec.samples[sample]['GT'] = genotype(variant)
  return rec
