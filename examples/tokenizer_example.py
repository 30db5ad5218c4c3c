"""
Example usage of the BERT WordPiece tokenizer.

This script builds a tokenizer from a vocabulary file (or a small built-in
vocabulary when none is given) and walks through tokenization, id
conversion, encoding and statistics.
"""

import argparse
import logging
import tempfile
from pathlib import Path

from bert_wordpiece.tokenizer import BertTokenizer, BertTokenizerConfig, Vocabulary
from bert_wordpiece.utils import compute_tokenization_stats


def create_sample_vocab() -> Vocabulary:
    """Create a small vocabulary for the example."""
    return Vocabulary([
        "[PAD]", "[UNK]", "[CLS]", "[SEP]", "[MASK]",
        "the", "quick", "brown", "fox", "jump", "##s", "over", "lazy", "dog",
        "un", "##aff", "##able", "token", "##ization", "##izer", "is", "a",
        "word", "##piece", "hello", "world", ",", ".", "!", "?", "cafe",
        "中", "国", "[SPECIAL]",
    ], source="sample")


def main():
    """Main example demonstrating WordPiece tokenizer usage."""
    parser = argparse.ArgumentParser(description="BERT WordPiece tokenizer example")
    parser.add_argument("--vocab-file", type=str, default=None, help="Path to vocab.txt")
    parser.add_argument("--cased", action="store_true", help="Do not lowercase the input")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    print("BERT WordPiece Tokenizer Example")
    print("=" * 50)

    # 1. Build the tokenizer
    print("\n1. Building tokenizer...")
    config = BertTokenizerConfig(do_lower_case=not args.cased, never_split=["[SPECIAL]"])
    if args.vocab_file:
        tokenizer = BertTokenizer.from_vocab_file(args.vocab_file, config)
    else:
        tokenizer = BertTokenizer(create_sample_vocab(), config)
    print(tokenizer)

    # 2. Tokenize
    print("\n2. Tokenizing text...")
    test_text = "The quick brown fox jumps over the lazy dog. Unaffable [SPECIAL] 中国!"
    print(f"Original text: '{test_text}'")
    print(f"Basic units: {tokenizer.basic_tokenizer.tokenize(test_text)}")
    tokens = tokenizer.tokenize(test_text)
    print(f"WordPiece tokens: {tokens}")

    # 3. Convert to ids and back
    print("\n3. Converting tokens...")
    token_ids = tokenizer.convert_tokens_to_ids(tokens)
    print(f"Token IDs: {token_ids}")
    print(f"Surface string: '{tokenizer.convert_tokens_to_string(tokens)}'")

    # 4. Model inputs
    print("\n4. Encoding a sentence pair...")
    encoding = tokenizer.encode_plus("Hello, world!", "Tokenization is a word piece?")
    for name, values in encoding.items():
        print(f"  {name}: {values}")

    batch_tensor = tokenizer.encode_batch(["Hello world!", "The lazy dog."], return_tensors='pt')
    print(f"Batch tensor shape: {batch_tensor.shape}")

    # 5. Special tokens
    print("\n5. Special token information:")
    print(f"PAD token ID: {tokenizer.pad_token_id}")
    print(f"UNK token ID: {tokenizer.unk_token_id}")
    print(f"CLS token ID: {tokenizer.cls_token_id}")
    print(f"SEP token ID: {tokenizer.sep_token_id}")
    print(f"MASK token ID: {tokenizer.mask_token_id}")

    # 6. Statistics
    print("\n6. Tokenization statistics:")
    stats = compute_tokenization_stats(tokenizer, [test_text, "Hello world!", "Xylophone zzz"])
    for name, value in stats.to_dict().items():
        print(f"  - {name}: {value}")

    # 7. Save / load
    print("\n7. Testing save/load functionality...")
    with tempfile.TemporaryDirectory() as temp_dir:
        save_path = Path(temp_dir) / "bert_tokenizer"
        tokenizer.save(save_path)
        loaded_tokenizer = BertTokenizer.load(save_path)
        if loaded_tokenizer.tokenize(test_text) == tokens:
            print("✓ Loaded tokenizer produces identical results!")
        else:
            print("✗ Loaded tokenizer results differ from original")

    print("\n" + "=" * 50)
    print("WordPiece tokenizer example completed successfully!")
    print("=" * 50)


if __name__ == "__main__":
    main()
