import httpx


class FakeResp:
    def __init__(self, data, status_code=200):
        self.data = data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError("Error", request=None, response=None)

    def json(self):
        return self.data


class DummyClient:
    """Records every GET and answers with handler(params)."""

    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    async def get(self, url, params=None, **kwargs):
        self.calls.append((url, params, kwargs))
        return FakeResp(self.handler(params))


MOVIE_PAYLOAD = {
    "Title": "The Toxic Avenger",
    "Year": "1984",
    "Rated": "R",
    "Released": "04 Apr 1986",
    "Runtime": "82 min",
    "Genre": "Action, Comedy, Horror",
    "Director": "Michael Herz, Lloyd Kaufman",
    "Writer": "Lloyd Kaufman, Joe Ritter",
    "Actors": "Andree Maranda, Mitch Cohen, Jennifer Babtist",
    "Plot": "Tromaville has a monstrous new hero.",
    "Language": "English",
    "Country": "United States",
    "Awards": "N/A",
    "Poster": "https://m.media-amazon.com/images/M/toxic.jpg",
    "Ratings": [{"Source": "Internet Movie Database", "Value": "6.2/10"}],
    "Metascore": "N/A",
    "imdbRating": "6.2",
    "imdbVotes": "28,412",
    "imdbID": "tt0090190",
    "Type": "movie",
    "BoxOffice": "N/A",
    "Response": "True",
}

SERIES_PAYLOAD = {
    "Title": "Mr. Robot",
    "Year": "2015–2019",
    "Rated": "TV-MA",
    "Released": "24 Jun 2015",
    "Runtime": "49 min",
    "Genre": "Crime, Drama, Thriller",
    "Director": "N/A",
    "Writer": "Sam Esmail",
    "Actors": "Rami Malek, Christian Slater, Carly Chaikin",
    "Plot": "Elliot, a cyber-security engineer, is recruited by a hacker.",
    "Language": "English",
    "Country": "United States",
    "Poster": "https://m.media-amazon.com/images/M/robot.jpg",
    "Metascore": "N/A",
    "imdbRating": "8.5",
    "imdbVotes": "412,020",
    "imdbID": "tt4158110",
    "Type": "series",
    "totalSeasons": "3",
    "Response": "True",
}

EPISODE_PAYLOAD = {
    "Title": "eps1.0_hellofriend.mov",
    "Year": "2015",
    "Rated": "TV-MA",
    "Released": "24 Jun 2015",
    "Season": "1",
    "Episode": "1",
    "imdbRating": "9.0",
    "imdbID": "tt4730002",
    "seriesID": "tt4158110",
    "Type": "episode",
    "Response": "True",
}

SEARCH_PAYLOAD = {
    "Search": [
        {"Title": "The Toxic Avenger", "Year": "1984", "imdbID": "tt0090190",
         "Type": "movie", "Poster": "https://m.media-amazon.com/images/M/toxic.jpg"},
        {"Title": "Toxic Crusaders", "Year": "1991–", "imdbID": "tt0101213",
         "Type": "series", "Poster": "N/A"},
    ],
    "totalResults": "42",
    "Response": "True",
}

ERROR_PAYLOAD = {"Response": "False", "Error": "Movie not found!"}


def season_payload(season):
    return {
        "Title": "Mr. Robot",
        "Season": str(season),
        "totalSeasons": "3",
        "Episodes": [
            {"Title": f"s{season}e1", "Released": "2015-06-24", "Episode": "1",
             "imdbRating": "9.0", "imdbID": f"tt{season}001"},
            {"Title": f"s{season}e2", "Released": "2015-07-01", "Episode": "2",
             "imdbRating": "N/A", "imdbID": f"tt{season}002"},
        ],
        "Response": "True",
    }

