from email_parts import File, TextPart

# Literal text: charset defaults to utf-8, encoding to quoted-printable
part = TextPart("Grüße aus Köln", subtype="plain")
part.headers.add_text_header("X-Campaign", "welcome")
print(part.to_string().decode())

# Large bodies: stream the encoded output instead of rendering it in memory
big = TextPart(File("report.txt"), charset="utf-8", encoding="base64")
with open("report.part", "wb") as out:
    for chunk in big.to_iterable():
        out.write(chunk)
