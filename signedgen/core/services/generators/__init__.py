"""
Generators — produce GeneratedDocuments from schema input.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedDocument``; saving (merge, sign, write) is left to
``signedgen.core.persistence.writer.FileWriter``.
"""
