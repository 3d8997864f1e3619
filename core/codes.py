"""Error messages shared by the use cases and the web layer."""

ERR_UNAUTHORIZED = "unauthorized: token cookie missing or invalid"
ERR_TOKEN_EXPIRED = "token expired, please login again"
ERR_MATCHING_TOKEN = "token does not match"
ERR_ASSERT_CLAIMS = "unable to read token claims"
ERR_ASSERT_USERID = "unable to read user id from session"
ERR_GET_TRANSACTION = "unable to fetch transaction"
ERR_NEW_TRANSACTION = "unable to create transaction"
ERR_FETCHING_DATA_USER_SVC = "unable to fetch data from user service"
ERR_UNMARSHAL = "unable to decode response"
ERR_ASSERT_RESP = "unexpected response from user service"
ERR_PDF = "unable to generate pdf"
ERR_READING_REQ_BODY = "unable to read request body"
ERR_ROUTE_NOT_FOUND = "route not found"
ERR_METHOD_NOT_ALLOWED = "method not allowed"
ERR_INTERNAL = "An unexpected error occurred. It has been logged."
