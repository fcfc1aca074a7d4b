"""
Configuration constants for the LA Yelp review analysis:
- paths for the raw CSV, figures and the run-local caches
- schema of the scraped review table
- text cleaning, DFM trimming and topic model settings
- Word2Vec and regression hyperparameters
"""
import multiprocessing
import os

# paths
DATA_PATH = os.path.join("data", "LA_Yelp_Reviews.csv")
OUTPUT_DIR = "outputs"
FIGURE_DIR = os.path.join(OUTPUT_DIR, "figures")
CACHE_DIR = os.path.join(OUTPUT_DIR, "cache")
CORPUS_FILE = "comments.txt"            # one raw review per line
NORMALIZED_CORPUS_FILE = "comments_norm.txt"

# schema
REQUIRED_COLUMNS = [
    'Rank', 'CommentDate', 'Date', 'RestaurantName', 'Comment',
    'Address', 'StarRating', 'NumberOfReviews', 'Style', 'Price',
]
DROP_COLUMNS = ['Date']  # scrape date, same value on every row
CATEGORICAL_COLUMNS = ['RestaurantName', 'Price']
NUMERIC_COLUMNS = ['Rank', 'StarRating', 'NumberOfReviews']
TEXT_COLUMN = 'Comment'
TARGET_COLUMN = 'StarRating'

# text
DOMAIN_STOPWORDS = {'food', 'place'}
MIN_TOKEN_LENGTH = 1

# DFM trim band, as proportion of documents
MIN_DOCFREQ = 0.01
MAX_DOCFREQ = 0.95
DOCFREQ_TYPE = 'prop'

# LDA
LDA_NUM_TOPICS = 3
LDA_EXTENDED_NUM_TOPICS = 25
RUN_TOPIC_SEARCH = False   # coherence search over TOPIC_SEARCH_RANGE is slow
TOPIC_SEARCH_RANGE = range(2, 31)
LDA_PASSES = 30
LDA_ITERATIONS = 400
TOP_N_TERMS = 10

# LSA
LSA_COMPONENTS = 5
LSA_MIN_DF = 1
LSA_MAX_DF = 1.0

# Word2Vec
W2V_PARAMS = dict(
    vector_size=100,  # dimensionality of word vectors
    window=5,         # context window size
    min_count=5,      # minimum term frequency
    epochs=10,        # training iterations over the corpus
)
W2V_WORKERS = multiprocessing.cpu_count()
NEIGHBOR_QUERIES = ['delicious', 'service', 'price', 'wait']

# modeling
TEST_SIZE = 0.2
RANDOM_STATE = 42
SVR_PARAM_GRID = {
    'C': [0.1, 1, 10],
    'gamma': ['scale', 0.01, 0.1],
    'epsilon': [0.1, 0.5],
}
RF_PARAM_GRID = {
    'n_estimators': [100, 300],
    'max_depth': [None, 10],
    'min_samples_leaf': [1, 5],
}
RIDGE_ALPHA = 1.0
LASSO_ALPHA = 0.01
ELASTIC_NET_ALPHA = 0.05
ELASTIC_NET_L1_RATIO = 0.5
