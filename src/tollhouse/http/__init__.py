"""HTTP primitives: headers, request, response, cookie codec and jar."""
