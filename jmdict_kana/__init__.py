"""JMdict kana index builder.

Downloads the JMdict-simplified release and compresses it into a
hiragana-keyed phonetic index.
"""

__version__ = "1.0.0"
