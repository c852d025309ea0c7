"""gh-vault Meta information.
   gh-vault keeps a GitHub fine-grained token in the OS vault, with a
   permission-locked file as fallback.
"""
__title__ = 'gh-vault'
__description__ = (
   'Credential vault for a GitHub command-line tool: OS keyring '
   'storage with a plain-text file fallback.'
)
__version__ = '0.1.0'
