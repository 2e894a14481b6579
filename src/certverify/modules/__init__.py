"""CertVerify API modules."""
