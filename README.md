# tubefetch

tubefetch keeps a store of the latest YouTube videos for a search query and
serves them through a small JSON API.

A background fetcher asks the YouTube Data API every ten seconds for the ten
newest videos published in the last 24 hours that match the query, and saves
or updates each one in the database. When an API key runs out of quota the
client moves on to the next configured key; once every key has been tried, the
fetch fails with an error, which is logged, and the fetcher tries again on its
next tick. The client remembers which key it was last using between fetches.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Storage

Videos are kept in an SQLite database file. The file is the one named by
`DB_NAME` (by default a file called `youtube_videos` in the working
directory). `DB_HOST`, `DB_PORT`, `DB_USER` and `DB_PASSWORD` appear in the
connection string that `Config.database_url()` builds, but the SQLite storage
does not use them.

## Configuration

Settings are read from the environment. A `.env` file in the working directory
is loaded first if present; variables already set in the environment take
precedence over it. If there is no `.env` file a warning is logged and only the
environment is used. Empty variables count as unset.

| Variable           | Default          | Meaning                                   |
|--------------------|------------------|-------------------------------------------|
| `DB_HOST`          | `localhost`      | Database host (not used by SQLite)        |
| `DB_PORT`          | `5432`           | Database port (not used by SQLite)        |
| `DB_USER`          | `postgres`       | Database user (not used by SQLite)        |
| `DB_PASSWORD`      | *(empty)*        | Database password (not used by SQLite)    |
| `DB_NAME`          | `youtube_videos` | Database file                             |
| `YOUTUBE_API_KEYS` | *(empty)*        | Comma-separated YouTube Data API keys     |
| `SEARCH_QUERY`     | `cricket`        | Query used when searching for videos      |
| `SERVER_PORT`      | `8080`           | Port the HTTP server listens on           |

When `YOUTUBE_API_KEYS` is empty the client is given a single empty key, so the
server starts but every fetch fails.

An example `.env`:

```
YOUTUBE_API_KEYS=placeholder
SEARCH_QUERY=cricket
SERVER_PORT=8080
```

## Usage

### Creating the table

```
tubefetch-migrate [MIGRATION]
```

runs the SQL statements in the file `MIGRATION` against the configured
database and prints `Migration completed successfully`. Without an argument the
file is `migrations/001_create_videos_table.sql`, relative to the working
directory. The command exits with status 1 if the database cannot be opened,
the file cannot be read or the SQL fails.

The package does not ship a migration file; you supply it. The `videos` table
needs these columns, with `id` unique so that saving a video a second time
updates it:

```sql
CREATE TABLE IF NOT EXISTS videos (
    id            TEXT PRIMARY KEY,
    title         TEXT NOT NULL,
    description   TEXT,
    published_at  TEXT NOT NULL,
    thumbnail_url TEXT,
    created_at    TEXT NOT NULL,
    updated_at    TEXT NOT NULL
);
```

### Running the server

```
tubefetch-server
```

starts the background fetcher and Flask's built-in HTTP server on
`0.0.0.0:SERVER_PORT`, and runs until it receives SIGINT or SIGTERM. It exits
with status 1 if `SERVER_PORT` is not a number, the database cannot be opened
or the YouTube client cannot be created. The first fetch happens ten seconds
after start-up.

### `GET /api/videos`

Returns stored videos, one page at a time.

| Parameter    | Default        | Accepted values                                  |
|--------------|----------------|--------------------------------------------------|
| `page`       | `1`            | integer of at least 1                            |
| `limit`      | `10`           | integer from 1 to 50                             |
| `sort_by`    | `published_at` | `published_at`, `title`, `created_at`            |
| `sort_order` | `desc`         | `asc`, `desc`                                    |

Values outside these ranges, or that are not plain decimal integers, quietly
fall back to the default; `sort_by` and `sort_order` are matched
case-insensitively.

A successful response looks like:

```json
{
  "videos": [
    {
      "id": "abc123",
      "title": "Match highlights",
      "description": "...",
      "published_at": "2024-03-01T10:00:00Z",
      "thumbnail_url": "https://i.ytimg.com/vi/abc123/default.jpg",
      "created_at": "2024-03-01T10:00:05.123456Z",
      "updated_at": "2024-03-01T10:00:05.123456Z"
    }
  ],
  "page": 1,
  "limit": 10,
  "total_count": 1,
  "total_pages": 1
}
```

Timestamps are RFC 3339; a video's `created_at` is set when it is first saved
and kept on later saves, while `updated_at` changes each time. If the database
query fails, the endpoint answers with status 500 and
`{"error": "Failed to fetch videos"}`.

### `GET /swagger/doc.json`

Returns the Swagger 2.0 description of the API as JSON.

## Using the pieces directly

- `tubefetch.config.load()` returns a `Config`; `Config.database_url()` gives
  the connection string. `get_env(key, default)` reads one variable.
- `tubefetch.database.Database.open(dsn)` opens the SQLite database named by
  the `dbname` in a key=value string, or by a plain path. `Database` can also
  wrap an existing connection, works as a context manager, and offers
  `save_video`, `get_videos(page, limit, sort_by, sort_order)`,
  `execute_script` and `close`. Failures raise `DatabaseError`.
- `tubefetch.models.Video` and `PaginatedResponse` hold records; `to_dict()`
  gives their JSON form.
- `tubefetch.youtube.Client(api_keys, search_query, session=None)` fetches
  recent videos as `FetchedVideo` records with `fetch_latest_videos()`, raising
  `YouTubeError`, or `QuotaExceededError` once every key is out of quota. Any
  object with a `requests`-style `get` method can be passed as `session`.
- `tubefetch.fetcher.Fetcher(client, db, interval)` runs the fetch-and-store
  loop: `start()` blocks until `stop()` is called (calling `stop()` twice raises
  `RuntimeError`), and `fetch_and_store()` runs one round and returns how many
  videos were saved. `interval` is in seconds or a `timedelta`.
- `tubefetch.handler.parse_video_query(params)` applies the query-parameter
  rules above and returns a `VideoQuery`; `VideoHandler(db).get_videos(params)`
  returns the status and JSON body for a request.
- `tubefetch.server.create_app(db)` builds the Flask application.
- `tubefetch.apidocs.swagger_spec(host, base_path)` returns the Swagger
  document.
- `tubefetch.migrate.run_migration(db, path)` applies a SQL migration file.

## What it does not do

- It stores videos only in SQLite; it does not connect to a database server.
- It serves the Swagger document as JSON only; there is no interactive
  documentation page.
- It ships no migration file; the table schema has to be provided as shown
  above.