# Qt measures text positions in utf-16 code units
ENC = "utf-16-le"
