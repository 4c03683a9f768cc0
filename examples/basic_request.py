"""Basic curlargs example: build a request from curl-style options and send it."""

import asyncio

from curlargs import CurlHTTPClient, MappingOptionSource, build_client, build_request

# Equivalent of:
#   curl -X POST -H "X-Demo: 1" --json '{"title": "Hello"}' -L --max-time 10 \
#        https://jsonplaceholder.typicode.com/posts
options = MappingOptionSource(
    {
        "request": "POST",
        "header": ["X-Demo: 1"],
        "json": '{"title": "Hello from curlargs!", "userId": 1}',
        "location": True,
        "max-time": 10.0,
    }
)


async def main():
    """Send the request and print the result."""
    request = build_request(options, ["https://jsonplaceholder.typicode.com/posts"])
    config = build_client(options)

    print(f"{request.method} {request.url}")
    for name, value in request.headers:
        print(f"> {name}: {value}")

    async with CurlHTTPClient(config) as client:
        response = await client.send(request)

    print(f"< {response.status_code} {response.reason_phrase}")
    print(response.text)


if __name__ == "__main__":
    asyncio.run(main())
