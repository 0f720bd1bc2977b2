class ConfigurationError(ValueError):
  """Raised when an input stream does not declare exactly one sample"""
  pass


class MalformedRecordError(ValueError):
  """Raised for a record the overlay can not represent, such as one with no ALT allele"""
  pass
