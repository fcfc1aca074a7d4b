import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

STOP_WORDS = {'the', 'a', 'and', 'was', 'is', 'it', 'we', 'i', 'to', 'of', 'food', 'place'}

COMMENTS = [
    "Great tacos and great salsa, friendly staff!",
    "The ramen was cold and the service was slow.",
    "Amazing sushi, fresh fish, a bit pricey.",
    "Terrible wait, 45 minutes for a table.",
    "Best burger in LA, fries were crispy.",
    "Friendly service, tacos were fresh and tasty.",
    "Slow service but the sushi was amazing.",
    "Pricey burger, fries were soggy and cold.",
    "Great ramen broth, friendly staff, short wait.",
    "Fresh salsa, great tacos, will come back!",
    "Cold fries and a slow wait, not again.",
    "Amazing service and fresh sushi rolls.",
]


@pytest.fixture
def raw_reviews():
    n = len(COMMENTS)
    return pd.DataFrame({
        'Rank': list(range(1, n + 1)),
        'CommentDate': ['2019-01-05', '2019-01-19', '2019-02-02', '2019-03-10',
                        '2019-03-15', '2019-04-01', 'not a date', '2019-05-20',
                        '2019-06-07', '2019-06-08', '2019-07-04', '2019-12-25'],
        'Date': ['2019-12-31'] * n,
        'RestaurantName': ['Taco Spot', 'Ramen House', 'Sushi Bar', 'Diner',
                           'Burger Joint', 'Taco Spot', 'Sushi Bar', 'Burger Joint',
                           'Ramen House', 'Taco Spot', 'Diner', 'Sushi Bar'],
        'Comment': COMMENTS,
        'Address': ['123 Main St'] * n,
        'StarRating': [5, 2, 4.5, 1, 5, 4, 3.5, 2, 4.5, 5, 1.5, 4],
        'NumberOfReviews': [120, 80, 300, 40, 500, 120, 300, 500, 80, 120, 40, 300],
        'Style': ['Mexican', 'Japanese', 'Japanese', 'American', 'American', 'Mexican',
                  'Japanese', 'American', 'Japanese', 'Mexican', 'American', 'Japanese'],
        'Price': ['$', '$$', '$$$', None, '$$', '$', '$$$', '$$', '$$', '$', None, '$$$'],
    })


@pytest.fixture
def reviews(raw_reviews):
    from yelp_la_reviews.ingest import clean_reviews
    return clean_reviews(raw_reviews)


@pytest.fixture
def stop_words():
    return STOP_WORDS
