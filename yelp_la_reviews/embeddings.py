"""
Word2Vec embeddings trained on the raw review text.

The comments are written to a flat text file (one review per line), a
normalized copy of that file is the training corpus, and the trained vectors
are cached in word2vec binary format keyed by the sha256 of the normalized
corpus and the training settings. A changed corpus or setting means a new key,
so stale vectors are never reused.
"""
import glob
import hashlib
import json
import os

import numpy as np
from gensim.models import KeyedVectors, Word2Vec
from gensim.models.word2vec import LineSentence

from . import config
from .preprocess import normalize_text


def write_corpus(comments, path):
    """One review per line; missing comments become empty lines."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        for text in comments:
            line = text if isinstance(text, str) else ""
            f.write(" ".join(line.split()) + "\n")
    return path


def normalize_corpus_file(src, dst):
    with open(src, encoding='utf-8') as fin, open(dst, 'w', encoding='utf-8') as fout:
        for line in fin:
            fout.write(normalize_text(line) + "\n")
    return dst


def corpus_hash(path):
    sha = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            sha.update(chunk)
    return sha.hexdigest()


def train_word2vec(corpus_path, workers=config.W2V_WORKERS, seed=config.RANDOM_STATE, **params):
    params = {**config.W2V_PARAMS, **params}
    print(f"Training Word2Vec on {corpus_path} with {params} ({workers} workers)...")
    model = Word2Vec(LineSentence(corpus_path), workers=workers, seed=seed, **params)
    print(f"✅ Vocabulary size: {len(model.wv)}")
    return model.wv


class EmbeddingCache:
    """Word vectors on disk, one binary file per corpus and settings hash."""

    PREFIX = "word2vec_"

    def __init__(self, cache_dir=config.CACHE_DIR):
        self.cache_dir = cache_dir
        os.makedirs(cache_dir, exist_ok=True)

    def path_for(self, key):
        return os.path.join(self.cache_dir, f"{self.PREFIX}{key}.bin")

    def load(self, key):
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        return KeyedVectors.load_word2vec_format(path, binary=True)

    def store(self, key, kv):
        path = self.path_for(key)
        kv.save_word2vec_format(path, binary=True)
        return path

    def evict_stale(self, key):
        """Remove vector files built from any other corpus or settings."""
        keep = self.path_for(key)
        removed = []
        for path in glob.glob(os.path.join(self.cache_dir, f"{self.PREFIX}*.bin")):
            if path != keep:
                os.remove(path)
                removed.append(path)
        return removed

    def key_for(self, corpus_path, params):
        """Hash of the corpus bytes plus the effective training parameters."""
        settings = {k: v for k, v in params.items() if k != 'workers'}
        sha = hashlib.sha256(corpus_hash(corpus_path).encode('utf-8'))
        sha.update(json.dumps(settings, sort_keys=True, default=str).encode('utf-8'))
        return sha.hexdigest()

    def get_or_train(self, corpus_path, train_fn=train_word2vec, **train_params):
        key = self.key_for(corpus_path, {**config.W2V_PARAMS, **train_params})
        kv = self.load(key)
        if kv is not None:
            print(f"Loaded cached vectors: {self.path_for(key)}")
            return kv

        kv = train_fn(corpus_path, **train_params)
        print(f"Saved vectors: {self.store(key, kv)}")
        for path in self.evict_stale(key):
            print(f"Removed stale vectors: {path}")
        # reload so a fresh run and a cached run see the same float32 table
        return self.load(key)


def prepare_embeddings(comments, work_dir=config.CACHE_DIR, **train_params):
    raw_path = write_corpus(comments, os.path.join(work_dir, config.CORPUS_FILE))
    norm_path = normalize_corpus_file(raw_path, os.path.join(work_dir, config.NORMALIZED_CORPUS_FILE))
    return EmbeddingCache(work_dir).get_or_train(norm_path, **train_params)


def nearest_neighbors(kv, word, topn=10):
    """Most similar terms by cosine similarity; unknown words raise KeyError."""
    return kv.most_similar(word, topn=topn)


def average_vector(tokens, kv):
    """Mean of the in-vocabulary token vectors, zero vector when none match."""
    vectors = [kv[t] for t in tokens if t in kv.key_to_index]
    if not vectors:
        return np.zeros(kv.vector_size, dtype=kv.vectors.dtype)
    return np.mean(vectors, axis=0)


def print_neighbors(kv, queries=config.NEIGHBOR_QUERIES, topn=10):
    for word in queries:
        if word not in kv.key_to_index:
            print(f"'{word}' not in vocabulary, skipped")
            continue
        neighbors = nearest_neighbors(kv, word, topn=topn)
        print(f"\n🔍 Nearest to '{word}': " + ", ".join(f"{w} ({s:.2f})" for w, s in neighbors))
