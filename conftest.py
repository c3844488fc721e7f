# Root conftest: puts the repository root on sys.path so tests import
# residue_atlas from a source checkout.
